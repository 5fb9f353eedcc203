"""
Per-event summarizers and their registration on the host event bus.

Each summarizer picks a few fields out of the event payload. Payloads may be
mappings or plain objects, and any field may be missing: a missing field is
left out of the summary rather than raising.
"""

from collections.abc import Mapping
from typing import Any, Callable, Dict

from .event_logger import EventLogger, encode_summary

PROMPT_LIMIT = 100
CONTENT_LIMIT = 100
TOOL_PAYLOAD_LIMIT = 200


class _Missing:
    def __bool__(self):
        return False

    def __repr__(self):
        return 'MISSING'


MISSING = _Missing()


def field(obj: Any, *names: str) -> Any:
    """Walk names through mappings/attributes; MISSING if any link is absent."""
    for name in names:
        if obj is MISSING or obj is None:
            return MISSING
        if isinstance(obj, Mapping):
            obj = obj.get(name, MISSING)
        else:
            obj = getattr(obj, name, MISSING)
    return obj


def clip(value: Any, limit: int) -> Any:
    if value is None:
        return MISSING
    if isinstance(value, str):
        return value[:limit]
    return value


def is_falsy(value: Any) -> bool:
    """Missing, None, False, 0 and "" count as empty; [] and {} do not."""
    if value is MISSING or value is None or value is False:
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    return isinstance(value, str) and value == ''


def first_present(*values: Any, default: Any) -> Any:
    for value in values:
        if not is_falsy(value):
            return value
    return default


def length_or(value: Any, default: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return len(value)
    return default


def compact(**fields: Any) -> Dict[str, Any]:
    return {key: value for key, value in fields.items() if value is not MISSING}


def summarize_before_model_resolve(event, ctx):
    return compact(prompt=clip(field(event, 'prompt'), PROMPT_LIMIT))


def summarize_before_prompt_build(event, ctx):
    return compact(
        prompt=clip(field(event, 'prompt'), PROMPT_LIMIT),
        messagesCount=length_or(field(event, 'messages'), 'unknown'),
    )


def summarize_before_agent_start(event, ctx):
    return compact(
        prompt=clip(field(event, 'prompt'), PROMPT_LIMIT),
        sessionKey=field(ctx, 'sessionKey'),
    )


def summarize_llm_input(event, ctx):
    return compact(
        model=field(event, 'model'),
        provider=field(event, 'provider'),
        prompt=clip(field(event, 'prompt'), PROMPT_LIMIT),
    )


def summarize_llm_output(event, ctx):
    return compact(
        textsCount=length_or(field(event, 'assistantTexts'), 0),
        stopReason=field(event, 'lastAssistant', 'stop_reason'),
    )


def summarize_agent_end(event, ctx):
    return compact(
        success=field(event, 'success'),
        error=field(event, 'error'),
        durationMs=field(event, 'durationMs'),
    )


def summarize_before_compaction(event, ctx):
    return compact(
        messageCount=field(event, 'messageCount'),
        tokenCount=field(event, 'tokenCount'),
    )


def summarize_after_compaction(event, ctx):
    return compact(
        messageCount=field(event, 'messageCount'),
        compactedCount=field(event, 'compactedCount'),
    )


def summarize_before_reset(event, ctx):
    return compact(reason=field(event, 'reason'))


def summarize_message_received(event, ctx):
    # 'from' is a keyword, hence the dict unpacking
    return compact(**{
        'from': field(event, 'from'),
        'content': clip(field(event, 'content'), CONTENT_LIMIT),
    })


def summarize_message_sending(event, ctx):
    return compact(
        to=field(event, 'to'),
        content=clip(field(event, 'content'), CONTENT_LIMIT),
    )


def summarize_message_sent(event, ctx):
    return compact(
        to=field(event, 'to'),
        success=field(event, 'success'),
        error=field(event, 'error'),
    )


def summarize_before_tool_call(event, ctx):
    args = first_present(field(event, 'params', 'args'), default={})
    return compact(
        tool=field(event, 'toolName'),
        args=encode_summary(args)[:TOOL_PAYLOAD_LIMIT],
    )


def summarize_after_tool_call(event, ctx):
    outcome = first_present(field(event, 'result'), field(event, 'error'), default={})
    return compact(
        tool=field(event, 'toolName'),
        result=encode_summary(outcome)[:TOOL_PAYLOAD_LIMIT],
    )


def summarize_tool_result_persist(event, ctx):
    return compact(
        toolName=field(event, 'toolName'),
        toolCallId=field(event, 'toolCallId'),
    )


def summarize_before_message_write(event, ctx):
    content = first_present(field(event, 'message', 'content'), default='')
    return compact(
        role=field(event, 'message', 'role'),
        content=encode_summary(content)[:CONTENT_LIMIT],
    )


def summarize_session_start(event, ctx):
    return compact(
        sessionKey=field(event, 'sessionKey'),
        agentId=field(event, 'agentId'),
    )


def summarize_session_end(event, ctx):
    return compact(sessionKey=field(event, 'sessionKey'))


def summarize_gateway_start(event, ctx):
    return compact(port=field(event, 'port'), host=field(event, 'host'))


def summarize_gateway_stop(event, ctx):
    return {}


SUMMARIZERS: Dict[str, Callable[[Any, Any], Dict[str, Any]]] = {
    'before_model_resolve': summarize_before_model_resolve,
    'before_prompt_build': summarize_before_prompt_build,
    'before_agent_start': summarize_before_agent_start,
    'llm_input': summarize_llm_input,
    'llm_output': summarize_llm_output,
    'agent_end': summarize_agent_end,
    'before_compaction': summarize_before_compaction,
    'after_compaction': summarize_after_compaction,
    'before_reset': summarize_before_reset,
    'message_received': summarize_message_received,
    'message_sending': summarize_message_sending,
    'message_sent': summarize_message_sent,
    'before_tool_call': summarize_before_tool_call,
    'after_tool_call': summarize_after_tool_call,
    'tool_result_persist': summarize_tool_result_persist,
    'before_message_write': summarize_before_message_write,
    'session_start': summarize_session_start,
    'session_end': summarize_session_end,
    'gateway_start': summarize_gateway_start,
    'gateway_stop': summarize_gateway_stop,
}

HOOK_EVENTS = tuple(SUMMARIZERS)


def make_handler(event_name: str, event_logger: EventLogger, enabled: bool = True):
    """Build an (event, ctx) -> ctx handler that logs one summary line."""
    summarize = SUMMARIZERS[event_name]

    def handler(event, ctx):
        if enabled:
            event_logger.write_log_entry(event_name, summarize(event, ctx))
        return ctx

    handler.__name__ = f'on_{event_name}'
    return handler


def register_handlers(api, event_logger: EventLogger, enabled: bool = True) -> None:
    for event_name in HOOK_EVENTS:
        api.on(event_name, make_handler(event_name, event_logger, enabled))
