import logging as module_logging

import labsite.logging as application_logging

application_logging.configure()
logger = module_logging.getLogger(__name__)

__project__ = "labsite-api"
__version__ = "2025.6.0"

logger.info(f"Labsite API {__version__}")
