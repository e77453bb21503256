"""Constants for repostore."""

# Default configuration file, looked up in the working directory
CONFIG_FILE = "repostore.yaml"

# Environment overrides for the storage section
ENV_ROOT = "REPOSTORE_ROOT"
ENV_QUOTA = "REPOSTORE_QUOTA"

# Version
REPOSTORE_VERSION = "0.1.0"
