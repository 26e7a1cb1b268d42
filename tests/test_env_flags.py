from core.env_flags import list_env_flags, read_env_booleans, toggle_env_boolean

ENV_TEXT = """{
    "DEBUG_CORE":   false,
    "DEBUG_PLUGINS": true,
    "USE_FAKE_CORE": "yes",
    "FILTER_SWAP_PLUGINS": []
}
"""


def test_read_env_booleans_skips_other_types():
    assert read_env_booleans(ENV_TEXT) == {"DEBUG_CORE": False, "DEBUG_PLUGINS": True}


def test_read_env_booleans_on_invalid_json():
    assert read_env_booleans("{") == {}


def test_list_env_flags_sorted_with_missing_as_false():
    flags = list_env_flags(ENV_TEXT)

    assert [key for key, _ in flags] == sorted(key for key, _ in flags)
    assert dict(flags)["DEBUG_PLUGINS"] is True
    assert dict(flags)["USE_FAKE_CORE"] is False
    assert dict(flags)["DEBUG_LOGBOX"] is False


def test_toggle_preserves_formatting():
    updated = toggle_env_boolean(ENV_TEXT, "DEBUG_CORE")

    assert updated == ENV_TEXT.replace('"DEBUG_CORE":   false', '"DEBUG_CORE":   true')
    assert toggle_env_boolean(updated, "DEBUG_CORE") == ENV_TEXT


def test_toggle_unknown_or_non_boolean_key_is_unchanged():
    assert toggle_env_boolean(ENV_TEXT, "DEBUG_EXCHANGES") == ENV_TEXT
    assert toggle_env_boolean(ENV_TEXT, "USE_FAKE_CORE") == ENV_TEXT


def test_toggle_does_not_touch_keys_sharing_a_prefix():
    text = '{"DEBUG": true, "DEBUG_CORE": true}'

    assert toggle_env_boolean(text, "DEBUG") == '{"DEBUG": false, "DEBUG_CORE": true}'
