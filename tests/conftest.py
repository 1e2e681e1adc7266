"""Root pytest configuration for all tests.

This conftest applies to all test types (unit, integration).
"""

import logging

# urllib3 logs every connection at DEBUG; tests never open real connections
# but keep the output quiet when a test misconfigures a session mock.
logging.getLogger("urllib3").setLevel(logging.WARNING)
