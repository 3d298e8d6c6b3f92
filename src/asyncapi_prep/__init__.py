"""AsyncAPI document preparation for event-catalog import.

Rewrites AsyncAPI JSON documents so that message payloads carry the
CloudEvents envelope (``convert``) or are reshaped for the catalog importer
(``for-import``).
"""

from src.shared.constants import VERSION

__version__ = VERSION
