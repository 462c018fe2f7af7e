from .config import AccessSettings, LogLevel, load_settings_from_env
from .compiler import ResolvedGroup, compile_access_config
from .emitter import emit_access_resources
from .exceptions import (
    AccessConfigError,
    ConfigurationError,
    DuplicateRoleError,
    GroupReferenceError,
    PolicyConfigError,
    PrincipalConfigError,
    RoleConfigError,
    SchemaValidationError,
)
from .logging import (
    AccessLogFormatter,
    AccessLoggerAdapter,
    get_access_logger,
    safe_preview,
    setup_logging,
)
from .naming import (
    ExportedPrincipal,
    LiteralPrincipal,
    Principal,
    as_list,
    lambda_logical_id,
    normalize_name,
    normalize_principal,
)
from .plugin import DEPLOY_HOOK, AccessPlugin
from .resources import ResourceCollection
from .schema import AccessSchema, define_schemas, validate_access

__all__ = [
    'AccessSettings',
    'LogLevel',
    'load_settings_from_env',
    'ResolvedGroup',
    'compile_access_config',
    'emit_access_resources',
    'AccessConfigError',
    'ConfigurationError',
    'DuplicateRoleError',
    'GroupReferenceError',
    'PolicyConfigError',
    'PrincipalConfigError',
    'RoleConfigError',
    'SchemaValidationError',
    'AccessLogFormatter',
    'AccessLoggerAdapter',
    'get_access_logger',
    'safe_preview',
    'setup_logging',
    'ExportedPrincipal',
    'LiteralPrincipal',
    'Principal',
    'as_list',
    'lambda_logical_id',
    'normalize_name',
    'normalize_principal',
    'DEPLOY_HOOK',
    'AccessPlugin',
    'ResourceCollection',
    'AccessSchema',
    'define_schemas',
    'validate_access',
]
