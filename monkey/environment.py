from typing import Dict, Optional

from .types import Value


class Environment:
    """A scope mapping identifiers to values, chained to its enclosing scope.

    Lookups walk outward through `parent` until the name is found. `set`
    always binds in this scope, so a `let` inside a function shadows an
    outer binding of the same name instead of changing it.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Value] = {}

    def get(self, name: str) -> Optional[Value]:
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return env.values[name]
            env = env.parent
        return None

    def set(self, name: str, value: Value) -> Value:
        self.values[name] = value
        return value

    def enclosed(self) -> 'Environment':
        """Create a fresh child scope of this environment."""
        return Environment(parent=self)
