# tests/test_plugin.py
"""End-to-end tests: register on a mock host API and fire events."""

from conftest import read_entries
from hook_logger import HOOK_EVENTS, HookLoggerPlugin, plugin
from hook_logger.config import LogConfig

EXPECTED_EVENTS = {
    "before_model_resolve",
    "before_prompt_build",
    "before_agent_start",
    "llm_input",
    "llm_output",
    "agent_end",
    "before_compaction",
    "after_compaction",
    "before_reset",
    "message_received",
    "message_sending",
    "message_sent",
    "before_tool_call",
    "after_tool_call",
    "tool_result_persist",
    "before_message_write",
    "session_start",
    "session_end",
    "gateway_start",
    "gateway_stop",
}


def test_plugin_metadata():
    assert plugin.id == "hook-logger"
    assert plugin.name == "hook-logger"
    assert plugin.description == "Log all hook stages for debugging"
    assert callable(plugin.register)


def test_register_subscribes_every_event_once(mock_api, log_config):
    HookLoggerPlugin(log_config).register(mock_api)

    registered = [call.args[0] for call in mock_api.on.call_args_list]
    assert set(registered) == EXPECTED_EVENTS
    assert len(registered) == len(EXPECTED_EVENTS)
    assert set(HOOK_EVENTS) == EXPECTED_EVENTS


def test_handler_returns_context_and_writes_entry(mock_api, log_config, log_dir, fixed_clock):
    hook_plugin = HookLoggerPlugin(log_config)
    hook_plugin.register(mock_api)
    hook_plugin.event_logger.clock = fixed_clock

    ctx = {"sessionKey": "test-session"}
    result = mock_api.handlers["before_model_resolve"]({"prompt": "test prompt"}, ctx)

    assert result is ctx
    assert read_entries(log_dir / "2026-10-19.log") == [
        ("2026-10-19T08:15:02.113Z", "before_model_resolve", {"prompt": "test prompt"}),
    ]


def test_full_session_lands_in_one_file(mock_api, log_config, log_dir, fixed_clock):
    hook_plugin = HookLoggerPlugin(log_config)
    hook_plugin.register(mock_api)
    hook_plugin.event_logger.clock = fixed_clock
    on = mock_api.handlers
    ctx = object()

    on["gateway_start"]({"port": 18789, "host": "127.0.0.1"}, ctx)
    on["session_start"]({"sessionKey": "s1", "agentId": "main"}, ctx)
    on["before_tool_call"]({"toolName": "exec"}, ctx)
    on["gateway_stop"]({}, ctx)

    entries = read_entries(log_dir / "2026-10-19.log")
    assert [(name, summary) for _, name, summary in entries] == [
        ("gateway_start", {"port": 18789, "host": "127.0.0.1"}),
        ("session_start", {"sessionKey": "s1", "agentId": "main"}),
        ("before_tool_call", {"tool": "exec", "args": "{}"}),
        ("gateway_stop", {}),
    ]


def test_disabled_plugin_registers_but_writes_nothing(mock_api, log_dir):
    HookLoggerPlugin(LogConfig(log_dir, enabled=False)).register(mock_api)

    ctx = {"sessionKey": "s1"}
    for name, handler in mock_api.handlers.items():
        assert handler({}, ctx) is ctx

    assert set(mock_api.handlers) == EXPECTED_EVENTS
    assert not log_dir.exists()


def test_default_plugin_resolves_config_lazily(monkeypatch, tmp_path):
    import hook_logger.descriptor as descriptor_module

    calls = []

    def fake_load_config():
        calls.append(True)
        return LogConfig(tmp_path / "logs")

    monkeypatch.setattr(descriptor_module, "load_config", fake_load_config)
    fresh = HookLoggerPlugin()

    assert calls == []
    assert fresh.config.log_dir == tmp_path / "logs"
    assert fresh.config is fresh.config
    assert calls == [True]
