from typing import Any, Dict, Iterable, Optional

from minitun.errors import RuntimeFailure
from minitun.types import ErrorVal


class Environment:
    """Mapping from names to runtime values for one execution context.

    There is no parent chain. A function call runs in a snapshot: a full,
    independent copy of the caller's bindings taken at call time, so
    assignments inside the callee never reach the caller.
    """
    def __init__(self, values: Optional[Dict[str, Any]] = None):
        self.values: Dict[str, Any] = dict(values or {})

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def get(self, name: str) -> Any:
        if name in self.values:
            return self.values[name]
        raise RuntimeFailure(ErrorVal('UndefinedVariable', f'undefined variable {name}'))

    def set(self, name: str, value: Any):
        self.values[name] = value

    def snapshot(self, unbind: Iterable[str] = ()) -> 'Environment':
        """Copy of this environment with the given names removed."""
        env = Environment(self.values)
        for name in unbind:
            env.values.pop(name, None)
        return env

    def bindings(self) -> Dict[str, Any]:
        return dict(self.values)
