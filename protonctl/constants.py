# Path: protonctl/constants.py
"""
Protonctl Module Constants

Module-wide constants for catalog queries, downloads and installs.
Product-specific values live in engine/product_kind.py.

No hardcoded user paths - home-relative paths are resolved by core/data_paths.py.
"""

# ============================================================================
# INSTALL STATES
# ============================================================================
STATE_RESOLVING: str = 'resolving'
STATE_SELECTING: str = 'selecting'
STATE_DOWNLOADING: str = 'downloading'
STATE_VERIFYING: str = 'verifying'
STATE_EXTRACTING: str = 'extracting'
STATE_CLEANING_UP: str = 'cleaning_up'
STATE_DONE: str = 'done'
STATE_FAILED: str = 'failed'

# ============================================================================
# HTTP STATUS CODES
# ============================================================================
HTTP_OK: int = 200
HTTP_NOT_FOUND: int = 404

# ============================================================================
# CATALOG
# ============================================================================
DEFAULT_CATALOG_URL: str = 'https://api.github.com/repos'
DEFAULT_USER_AGENT: str = 'protonctl-py'
MAX_PER_PAGE: int = 50
DEFAULT_PER_PAGE: int = 10
DEFAULT_PAGE: int = 1
LATEST_TAG: str = 'latest'

HEADER_USER_AGENT: str = 'User-Agent'
HEADER_ACCEPT: str = 'Accept'
ACCEPT_JSON: str = 'application/vnd.github+json'
ACCEPT_OCTET_STREAM: str = 'application/octet-stream'

# ============================================================================
# DOWNLOAD CONFIGURATION DEFAULTS
# ============================================================================
DEFAULT_CHUNK_SIZE: int = 65536  # 64KB chunks for streaming
DEFAULT_CONNECT_TIMEOUT: int = 30
DEFAULT_READ_TIMEOUT: int = 120  # Per socket read, no total limit

# ============================================================================
# INTEGRITY
# ============================================================================
CHECKSUM_SUFFIX: str = '.sha512sum'
DIGEST_HEX_LENGTH: int = 128  # SHA-512 rendered as lowercase hex

# ============================================================================
# ASSET ROLES
# ============================================================================
ROLE_ARCHIVE: str = 'archive'
ROLE_CHECKSUM: str = 'checksum'

# ============================================================================
# IPO LOGGING PREFIXES
# ============================================================================
LOG_INPUT: str = '[INPUT]'
LOG_PROCESS: str = '[PROCESS]'
LOG_OUTPUT: str = '[OUTPUT]'

# ============================================================================
# LOGGING COMPONENTS
# ============================================================================
LOGGER_ROOT: str = 'protonctl'
LOGGER_CORE: str = 'protonctl.core'
LOGGER_ENGINE: str = 'protonctl.engine'
LOGGER_CLI: str = 'protonctl.cli'
LOGGER_EXTRACTION: str = 'protonctl.extraction'

# ============================================================================
# LOG FORMAT
# ============================================================================
LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'
LOG_FILENAME: str = 'protonctl.log'
ERROR_LOG_FILENAME: str = 'errors.log'
DEFAULT_LOG_LEVEL: str = 'WARNING'

# ============================================================================
# DIRECTORY NAMES
# ============================================================================
CACHE_SUBPATH: str = '.local/share/protonctl'
CONFIG_SUBPATH: str = '.config/protonctl'
ENV_FILENAME: str = '.env'

# ============================================================================
# ENVIRONMENT VARIABLE KEYS (for reference in config_loader.py)
# ============================================================================
ENV_HOME: str = 'PROTONCTL_HOME'
ENV_CATALOG_URL: str = 'PROTONCTL_CATALOG_URL'
ENV_USER_AGENT: str = 'PROTONCTL_USER_AGENT'
ENV_CHUNK_SIZE: str = 'PROTONCTL_CHUNK_SIZE'
ENV_CONNECT_TIMEOUT: str = 'PROTONCTL_CONNECT_TIMEOUT'
ENV_READ_TIMEOUT: str = 'PROTONCTL_READ_TIMEOUT'
ENV_LOG_LEVEL: str = 'PROTONCTL_LOG_LEVEL'
ENV_LOG_CONSOLE: str = 'PROTONCTL_LOG_CONSOLE'
ENV_LOG_DIR: str = 'PROTONCTL_LOG_DIR'
ENV_FLATPAK: str = 'PROTONCTL_FLATPAK'

# ============================================================================
# EXIT CODES
# ============================================================================
EXIT_OK: int = 0
EXIT_FAILURE: int = 1
EXIT_INTERRUPTED: int = 130


__all__ = [
    # Install States
    'STATE_RESOLVING',
    'STATE_SELECTING',
    'STATE_DOWNLOADING',
    'STATE_VERIFYING',
    'STATE_EXTRACTING',
    'STATE_CLEANING_UP',
    'STATE_DONE',
    'STATE_FAILED',

    # HTTP Status Codes
    'HTTP_OK',
    'HTTP_NOT_FOUND',

    # Catalog
    'DEFAULT_CATALOG_URL',
    'DEFAULT_USER_AGENT',
    'MAX_PER_PAGE',
    'DEFAULT_PER_PAGE',
    'DEFAULT_PAGE',
    'LATEST_TAG',
    'HEADER_USER_AGENT',
    'HEADER_ACCEPT',
    'ACCEPT_JSON',
    'ACCEPT_OCTET_STREAM',

    # Download Configuration Defaults
    'DEFAULT_CHUNK_SIZE',
    'DEFAULT_CONNECT_TIMEOUT',
    'DEFAULT_READ_TIMEOUT',

    # Integrity
    'CHECKSUM_SUFFIX',
    'DIGEST_HEX_LENGTH',

    # Asset Roles
    'ROLE_ARCHIVE',
    'ROLE_CHECKSUM',

    # IPO Logging Prefixes
    'LOG_INPUT',
    'LOG_PROCESS',
    'LOG_OUTPUT',

    # Logging Components
    'LOGGER_ROOT',
    'LOGGER_CORE',
    'LOGGER_ENGINE',
    'LOGGER_CLI',
    'LOGGER_EXTRACTION',

    # Log Format
    'LOG_FORMAT',
    'LOG_DATE_FORMAT',
    'LOG_FILENAME',
    'ERROR_LOG_FILENAME',
    'DEFAULT_LOG_LEVEL',

    # Directory Names
    'CACHE_SUBPATH',
    'CONFIG_SUBPATH',
    'ENV_FILENAME',

    # Environment Variable Keys
    'ENV_HOME',
    'ENV_CATALOG_URL',
    'ENV_USER_AGENT',
    'ENV_CHUNK_SIZE',
    'ENV_CONNECT_TIMEOUT',
    'ENV_READ_TIMEOUT',
    'ENV_LOG_LEVEL',
    'ENV_LOG_CONSOLE',
    'ENV_LOG_DIR',
    'ENV_FLATPAK',

    # Exit Codes
    'EXIT_OK',
    'EXIT_FAILURE',
    'EXIT_INTERRUPTED',
]
