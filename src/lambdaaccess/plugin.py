"""Host adapter for the packaging pipeline.

``AccessPlugin`` binds the compiler and emitter to a deployment service
definition (the parsed ``provider`` / ``functions`` / ``resources``
mapping) and exposes the hook the host calls while packaging.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from .compiler import compile_access_config
from .config import AccessSettings
from .emitter import emit_access_resources
from .exceptions import ConfigurationError
from .logging import get_access_logger
from .naming import lambda_logical_id
from .resources import ResourceCollection
from .schema import define_schemas, validate_access

DEPLOY_HOOK = "package:createDeploymentArtifacts"

logger = get_access_logger(__name__)


class AccessPlugin:
    """Adds access resources to a service while it is being packaged.

    Args:
        service: Parsed service definition; ``resources.Resources`` is
            created in place when missing.
        name_to_logical_id: Function name → logical id mapping.
        log: Host log callable; receives prefixed diagnostics.
        settings: Build settings (defaults when omitted).
        schema_handler: Host schema handler to register schemas with.

    Example::

        plugin = AccessPlugin(service, log=print)
        plugin.hooks["package:createDeploymentArtifacts"]()
        service["resources"]["Resources"]  # now holds the generated resources
    """

    def __init__(
        self,
        service: dict[str, Any],
        name_to_logical_id: Callable[[str], str] = lambda_logical_id,
        log: Optional[Callable[[str], None]] = None,
        settings: Optional[AccessSettings] = None,
        schema_handler: Any = None,
    ) -> None:
        self.service = service
        self.name_to_logical_id = name_to_logical_id
        self.settings = settings or AccessSettings()
        self._host_log = log
        self.hooks: dict[str, Callable[[], None]] = {
            DEPLOY_HOOK: lambda: self.before_deploy(),
        }
        define_schemas(schema_handler)

    def log(self, message: str) -> None:
        line = f"{self.settings.log_prefix}: {message}"
        if self._host_log is None:
            logger.info(line)
        else:
            self._host_log(line)

    def before_deploy(self) -> None:
        """Compile ``provider.access`` and emit resources into the service.

        No-op when the service has no functions or no access block.

        Raises:
            ConfigurationError: ``access`` is present without ``groups``.
            AccessConfigError: any compile or emit failure.
        """
        functions = self.service.get("functions")
        access = (self.service.get("provider") or {}).get("access")
        if not isinstance(functions, dict) or access is None:
            return

        groups = access.get("groups")
        if groups is None:
            raise ConfigurationError('Access configuration must define "groups"')

        if self.settings.validate_schema:
            validate_access(access)

        resolved = compile_access_config(groups, functions, self.name_to_logical_id)
        emit_access_resources(
            resolved,
            self._resource_collection(),
            log=self.log if self._host_log is not None else None,
        )

    def _resource_collection(self) -> ResourceCollection:
        resources = self.service.get("resources")
        if resources is None:
            resources = self.service["resources"] = {}
        if resources.get("Resources") is None:
            resources["Resources"] = {}
        return ResourceCollection(resources["Resources"])


__all__ = [
    "AccessPlugin",
    "DEPLOY_HOOK",
]
