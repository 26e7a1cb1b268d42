from core.line_patcher import (
    ensure_trailing_comma,
    has_comment_marker,
    remove_trailing_comma,
    set_comment_state,
    toggle_comment,
)


def test_toggle_comment_inserts_marker_after_indent():
    assert toggle_comment("    bitcoin: true,") == "    // bitcoin: true,"


def test_toggle_comment_removes_marker_and_one_space():
    assert toggle_comment("    // bitcoin: true,") == "    bitcoin: true,"
    assert toggle_comment("//bitcoin: true") == "bitcoin: true"


def test_toggle_comment_twice_restores_line():
    line = "\t'monero': { apiKey: 'abc' },"

    assert toggle_comment(toggle_comment(line)) == line


def test_set_comment_state_is_a_noop_in_target_state():
    assert set_comment_state("  bitcoin: true,", True) == "  bitcoin: true,"
    assert set_comment_state("  // bitcoin: true,", False) == "  // bitcoin: true,"


def test_set_comment_state_forces_state():
    assert set_comment_state("  // bitcoin: true,", True) == "  bitcoin: true,"
    assert set_comment_state("  bitcoin: true,", False) == "  // bitcoin: true,"


def test_patcher_is_total_on_odd_input():
    assert toggle_comment("") == "// "
    assert set_comment_state("", True) == ""
    assert ensure_trailing_comma("") == ","
    assert remove_trailing_comma("") == ""


def test_ensure_trailing_comma():
    assert ensure_trailing_comma("  lifi: true") == "  lifi: true,"
    assert ensure_trailing_comma("  lifi: true   ") == "  lifi: true,"
    assert ensure_trailing_comma("  lifi: true, ") == "  lifi: true, "


def test_remove_trailing_comma():
    assert remove_trailing_comma("  lifi: true,") == "  lifi: true"
    assert remove_trailing_comma("  lifi: true ,  ") == "  lifi: true"
    assert remove_trailing_comma("  lifi: true") == "  lifi: true"


def test_has_comment_marker_ignores_indent():
    assert has_comment_marker("   // lifi: true")
    assert not has_comment_marker("   lifi: true // note")


def test_trailing_comma_goes_before_an_inline_comment():
    assert ensure_trailing_comma("  bitcoin: true // main") == "  bitcoin: true, // main"
    assert ensure_trailing_comma("  bitcoin: true, // main") == "  bitcoin: true, // main"
    assert remove_trailing_comma("  bitcoin: true, // main") == "  bitcoin: true // main"
    assert ensure_trailing_comma("  // bitcoin: true // main") == "  // bitcoin: true, // main"


def test_comment_marker_inside_quotes_is_not_a_comment():
    assert ensure_trailing_comma("  url: 'https://x'") == "  url: 'https://x',"
    assert remove_trailing_comma('  url: "https://x",') == '  url: "https://x"'
