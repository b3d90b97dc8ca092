"""
TUI decorators for safe action handling around remote calls.
"""

import logging
from functools import wraps
from typing import Any, Callable

from sitzungsverwaltung.errors import DecodeError, EmptySelectionError, TransportError
from sitzungsverwaltung.tui.state import SetAwaiting, SetStatus


logger = logging.getLogger(__name__)


def remote_action(description: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Run a controller method as the single in-flight request.

    Marks state as awaiting while the method runs. Transport and decode
    errors are logged and shown in the status bar; the method's own state
    changes up to the failure point are all that happened. A missing
    selection makes the method a no-op.
    """

    def decorator(action_func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(action_func)
        def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
            self.state.dispatch(SetAwaiting(description))
            self._notify()
            try:
                return action_func(self, *args, **kwargs)
            except EmptySelectionError:
                logger.debug("%s: nothing selected", description)
                return None
            except (TransportError, DecodeError) as e:
                logger.warning("%s failed: %s", description, e)
                self.state.dispatch(SetStatus(f"{description} failed: {e}"))
                return None
            finally:
                self.state.dispatch(SetAwaiting(None))

        return wrapper

    return decorator
