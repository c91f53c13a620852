"""
Reins dispatcher: run an execution plan.

For every segment, in order:
- enter the action scope, so get_flag()/set_flag() called from the callback
  see the action's flags before the global ones;
- restore each of the action's flags to the value recorded on the segment,
  or to its default when the segment did not set it;
- call the action with a fresh list of the segment's positional arguments
  and record the returned status;
- leave the action scope, also when the callback raises.

Callback exceptions propagate untouched: there is no retry, no skipping and
no rollback of segments that already ran.
"""
from .logging import get_logger

logger = get_logger(__name__)


class Dispatcher:
    """
    plan runner bound to a Registry (for actions, flags and scope switching).
    """

    def __init__(self, registry, /):
        self._registry = registry

    def __call__(self, plan, statuses=None, /):
        """
        run every segment of `plan`, appending each status to `statuses`
        (a new list when omitted) as soon as its action returns.
        """
        statuses = [] if statuses is None else statuses
        for position, segment in enumerate(plan, start=1):
            action = self._registry.actions.lookup(segment.action)
            with self._registry.scope(action.name):
                for flag in self._registry.flags.flags(action.name):
                    flag.restore(segment.flags.get(flag.name, flag.default))
                logger.debug("segment_dispatched", action=action.name, position=position, arguments=len(segment.arguments))
                status = action(list(segment.arguments))
            logger.debug("segment_finished", action=action.name, position=position, status=status)
            statuses.append(status)
        return statuses


def outcome(statuses, /):
    """
    the last non-zero status, or 0 when every action succeeded.
    """
    return next((status for status in reversed(statuses) if status), 0)


__all__ = (
    "Dispatcher",
    "outcome",
)
