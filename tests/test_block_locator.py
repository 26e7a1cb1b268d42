from core.block_locator import locate_block


def test_locates_body_between_braces(core_plugins_text):
    span = locate_block(core_plugins_text, "currencyPlugins")

    assert span is not None
    start, end = span
    assert core_plugins_text[start - 1] == "{"
    assert core_plugins_text[end] == "}"
    body = core_plugins_text[start:end]
    assert "bitcoin: true," in body
    assert "changenow" not in body


def test_nested_braces_do_not_end_the_block():
    text = "export const swapPlugins = {\n  a: { b: { c: 1 } },\n  d: 2\n}\nconst other = {}\n"

    start, end = locate_block(text, "swapPlugins")

    assert text[start:end] == "\n  a: { b: { c: 1 } },\n  d: 2\n"


def test_missing_anchor_is_not_found(core_plugins_text):
    assert locate_block(core_plugins_text, "tokenPlugins") is None


def test_missing_opening_brace_is_not_found():
    assert locate_block("export const currencyPlugins = []\n", "currencyPlugins") is None


def test_unbalanced_braces_are_not_found():
    text = "export const currencyPlugins = {\n  bitcoin: { x: 1,\n"

    assert locate_block(text, "currencyPlugins") is None


def test_first_declaration_wins():
    text = "export const swapPlugins = { a: 1 }\nexport const swapPlugins = { b: 2 }\n"

    start, end = locate_block(text, "swapPlugins")

    assert text[start:end] == " a: 1 "
