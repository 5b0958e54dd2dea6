from access_highlight.config_manager import ConfigManager
from access_highlight.plugin_manager import PluginManager


def _write_plugin(path, content):
    path.write_text(content, encoding="utf-8")


def _manager(tmp_path, value=""):
    config = ConfigManager(str(tmp_path / "config.json"))
    config.set_option("look.highlight", value)
    messages = []
    manager = PluginManager(output=messages.append)
    manager.set_managers(config)
    manager.load_builtin_plugins()
    return manager, config, messages


def test_plugin_discovery_and_hooks(tmp_path):
    plugins_dir = tmp_path / "plugins"
    plugins_dir.mkdir()

    _write_plugin(
        plugins_dir / "ping_plugin.py",
        "\n".join([
            "from access_highlight.plugin_specs import hookimpl",
            "",
            "class Plugin:",
            "    @hookimpl",
            "    def on_command(self, ctx, server, target, command, args):",
            "        if command == 'ping':",
            "            ctx.add_system_message(server, target, 'pong ' + args)",
            "            return True",
        ])
    )

    _write_plugin(
        plugins_dir / "setup_plugin.py",
        "\n".join([
            "from access_highlight.plugin_specs import hookimpl",
            "",
            "seen = {}",
            "",
            "class _Plugin:",
            "    @hookimpl",
            "    def on_startup(self, ctx):",
            "        seen['started'] = True",
            "",
            "def setup(ctx):",
            "    return _Plugin()",
        ])
    )

    _write_plugin(
        plugins_dir / "bad_plugin.py",
        "\n".join([
            "from access_highlight.plugin_specs import hookimpl",
            "",
            "class Plugin:",
            "    @hookimpl",
            "    def on_command(self, ctx, server, target, command, args):",
            "        if command == 'boom':",
            "            raise RuntimeError('boom')",
        ])
    )

    _write_plugin(plugins_dir / "broken_syntax.py", "def nope(:\n")

    messages = []
    manager = PluginManager(output=messages.append)
    manager.plugins_dir = plugins_dir

    loaded = manager.discover_and_load_plugins()
    assert loaded == 3

    assert manager.call_command("srv", "#chan", "ping", "hi") is True
    assert messages == ["pong hi"]

    # Plugin errors are reported, not raised
    assert manager.call_command("srv", "#chan", "boom", "") is False
    assert manager.call_command("srv", "#chan", "unknown", "") is False

    manager.call_startup()
    seen = manager.loaded_plugins["setup_plugin"]["module"].seen
    assert seen["started"] is True

    assert manager.unload_plugin("ping_plugin") is True
    assert manager.call_command("srv", "#chan", "ping", "hi") is False
    assert manager.unload_plugin("ping_plugin") is False


def test_highlight_command_through_plugin_manager(tmp_path):
    manager, config, messages = _manager(tmp_path, "foo,bar")

    assert manager.call_command("srv", "#chan", "highlight", "ADD Baz") is True
    assert config.get_option("look.highlight") == "foo,bar,baz"

    messages.clear()
    assert manager.call_command("srv", "#chan", "highlight", "") is True
    assert messages == ["Current highlights:", "  foo", "  bar", "  baz"]

    assert manager.call_command("srv", "#chan", "HIGHLIGHT", "del FOO") is True
    assert ConfigManager(config.config_path).get_option("look.highlight") == "bar,baz"


def test_highlight_usage_for_unknown_action(tmp_path):
    manager, config, messages = _manager(tmp_path, "foo")
    messages.clear()

    assert manager.call_command("srv", "#chan", "highlight", "xyz") is True
    assert messages[0] == "Highlight usage:"
    assert config.get_option("look.highlight") == "foo"


def test_highlight_completion_and_description(tmp_path):
    manager, _, _ = _manager(tmp_path, "foo,bar")

    assert manager.call_complete("highlight", "a") == ["add"]
    assert manager.call_complete("highlight", "del b") == ["bar"]
    assert manager.call_complete("join", "#") == []

    commands = manager.describe_commands()
    assert commands["highlight"]["completion"] == "add || del || list"
    assert "add <phrase>" in commands["highlight"]["args"]


def test_builtin_plugins_register_once(tmp_path):
    manager, _, _ = _manager(tmp_path)

    assert manager.load_builtin_plugins() == 0
    assert manager.get_loaded_plugins() == ["highlight"]
    assert manager.reload_plugin("highlight") is False

    manager.call_startup()
    manager.call_shutdown()


def test_highlight_add_without_config_reports_error():
    messages = []
    manager = PluginManager(output=messages.append)
    manager.load_builtin_plugins()

    assert manager.call_command("srv", "#chan", "highlight", "add foo") is True
    assert messages == ["ERROR - could not save the highlights list."]


def test_highlight_startup_notice_uses_system_messages(tmp_path):
    manager, _, messages = _manager(tmp_path)
    messages.clear()

    manager.call_startup()
    assert messages == ["Highlight plugin loaded. Use /highlight add <phrase> to add phrases."]
