"""BaseService — abstract foundation for errlint services.

Every service receives the resolved :class:`ErrlintSettings` and an
optional :class:`PluginManager` at construction time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from errlint.config.settings import ErrlintSettings
    from errlint.plugins.manager import PluginManager


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class CheckService(BaseService):
            def check(self, paths: Sequence[Path]) -> ServiceResult:
                ...
    """

    def __init__(
        self,
        settings: ErrlintSettings,
        plugins: PluginManager | None = None,
    ) -> None:
        self._settings = settings
        self._plugins = plugins
