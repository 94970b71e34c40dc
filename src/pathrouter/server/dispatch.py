"""Action dispatch — call the bound action with its context."""

from pathrouter._internal.invoke import invoke
from pathrouter._internal.types import Action
from pathrouter.returns import Result, coerce_result
from pathrouter.server.resolve import ActionContext


async def dispatch(action: Action, context: ActionContext) -> Result:
    """Invoke *action* and normalize what it returns.

    *action* is either a controller method bound at mount time (so the
    controller is its receiver) or an inline callback. Exceptions from
    the action propagate unchanged; a return value that is neither a
    ``Result`` nor a mapping raises ``TypeError``.
    """
    return coerce_result(await invoke(action, context))
