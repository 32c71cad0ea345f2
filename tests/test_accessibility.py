import json

import pytest

from ayusetu.integrations.clients.mocks import MockAccessibilityClient


@pytest.mark.asyncio
async def test_languages_cover_indian_scripts(config):
    client = MockAccessibilityClient(config)

    languages = await client.get_languages()

    codes = [lang.code for lang in languages]
    assert codes[:2] == ["en", "hi"]
    hindi = languages[1]
    assert hindi.native_name == "हिंदी"
    assert hindi.to_wire()["isRTL"] is False


@pytest.mark.asyncio
async def test_settings_update_is_merged_but_not_stored(config):
    client = MockAccessibilityClient(config)

    updated = await client.update_accessibility_settings({"textSize": "large", "high_contrast": True})

    assert updated.text_size == "large"
    assert updated.high_contrast is True
    assert updated.theme_mode == "light"
    stored = await client.get_accessibility_settings()
    assert stored.text_size == "medium"


@pytest.mark.asyncio
async def test_offline_data_filters_and_limits(config):
    client = MockAccessibilityClient(config)

    everything = await client.get_offline_data()
    medication = await client.get_offline_data(data_type="medication")
    limited = await client.get_offline_data(limit=2)

    assert len(everything) == 5
    assert [item.id for item in medication] == ["offline-3"]
    assert len(limited) == 2


@pytest.mark.asyncio
async def test_delete_offline_data_reports_count(config):
    client = MockAccessibilityClient(config)

    result = await client.delete_offline_data(["offline-1", "offline-2"])

    assert result.success is True
    assert result.deleted_count == 2


@pytest.mark.asyncio
async def test_sync_and_voice_commands(config):
    client = MockAccessibilityClient(config)

    status = await client.sync_offline_data(force=True)
    assert status.sync_progress == 100
    assert status.synced_items == status.total_items

    actions = await client.get_voice_commands(category="action")
    assert {cmd.id for cmd in actions} == {"cmd-2", "cmd-4"}

    result = await client.execute_voice_command("book appointment")
    assert result.message == "Executing command: book appointment"


@pytest.mark.asyncio
async def test_translation_pack(config):
    client = MockAccessibilityClient(config)

    pack = await client.download_translation_pack("hi")

    assert pack.language == "hi"
    assert pack.is_available is True
    assert pack.translations["welcome"] == "स्वागत है"


@pytest.mark.asyncio
async def test_live_settings_update_wraps_body(live_services, router):
    router.add("PUT", "/accessibility/settings", {"textSize": "extra-large", "elderlyMode": True})

    settings = await live_services.accessibility.update_accessibility_settings({"text_size": "extra-large"})

    assert settings.text_size == "extra-large"
    assert settings.elderly_mode is True
    request = router.last("PUT", "/accessibility/settings")
    assert json.loads(request.content) == {"settings": {"textSize": "extra-large"}}
