"""Registry for clause selectors."""

from typing import Dict, Type, Any

from .base import ClauseSelector
from .fifo import FIFOSelector
from .ratio import RatioSelector
from .smallest import SmallestSelector


class SelectorRegistry:
    """Registry for managing clause selectors."""

    def __init__(self):
        self._selectors: Dict[str, Type[ClauseSelector]] = {}
        self._register_default_selectors()

    def _register_default_selectors(self):
        """Register default selectors."""
        self.register('smallest', SmallestSelector)
        self.register('fifo', FIFOSelector)
        self.register('ratio', RatioSelector)

    def register(self, name: str, selector_class: Type[ClauseSelector]):
        """Register a new selector type."""
        self._selectors[name.lower()] = selector_class

    def create_selector(self, name: str, **kwargs: Any) -> ClauseSelector:
        """Create a selector instance."""
        name = name.lower()

        if name not in self._selectors:
            raise ValueError(f"Unknown selector: {name}")

        return self._selectors[name](**kwargs)

    def list_selectors(self) -> list:
        """List available selector names."""
        return list(self._selectors.keys())


_registry = SelectorRegistry()


def get_selector(name: str, **kwargs: Any) -> ClauseSelector:
    """Get a clause selector instance."""
    return _registry.create_selector(name, **kwargs)
