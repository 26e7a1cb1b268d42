import json

import pytest

CORE_PLUGINS = (
    "import { makeFakePlugins } from './fake'\n"
    "\n"
    "export const currencyPlugins = {\n"
    "  bitcoin: true,\n"
    "  // litecoin: true,\n"
    "  ethereum: true,\n"
    "  'monero': { apiKey: 'abc' }\n"
    "}\n"
    "\n"
    "export const swapPlugins = {\n"
    "  changenow: true,\n"
    "  \"godex\": true,\n"
    "  lifi: true\n"
    "}\n"
)

ENV = {
    "DEBUG_CORE": False,
    "DEBUG_PLUGINS": True,
    "SOME_URL": "https://example.com",
    "FILTER_CURRENCY_PLUGINS": [],
    "FILTER_SWAP_PLUGINS": [],
}


@pytest.fixture
def core_plugins_text():
    return CORE_PLUGINS


@pytest.fixture
def env_text():
    return json.dumps(ENV, indent=2) + "\n"


@pytest.fixture
def make_workspace(tmp_path):
    """Create an edge-react-gui-like folder and return its path"""
    def _make(name="edge-react-gui", source=CORE_PLUGINS, env=None):
        folder = tmp_path / name
        (folder / "src" / "util").mkdir(parents=True)
        (folder / "src" / "util" / "corePlugins.ts").write_text(source, encoding="utf-8")
        env_text = env if env is not None else json.dumps(ENV, indent=2) + "\n"
        (folder / "env.json").write_text(env_text, encoding="utf-8")
        (folder / "package.json").write_text(json.dumps({"name": "edge-react-gui"}), encoding="utf-8")
        return folder
    return _make
