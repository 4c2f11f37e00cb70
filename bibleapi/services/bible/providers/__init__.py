# bibleapi/services/bible/providers/__init__.py
"""
Scraping providers, one module per site.

Each class's `name` is the key used in the version table and by the
provider manager.
"""

from .biblecom import ComProvider
from .biblegateway import GatewayProvider
from .biblehub import HubProvider
from .biblenow import NowProvider

PROVIDER_CLASSES = {
    cls.name: cls
    for cls in (GatewayProvider, HubProvider, NowProvider, ComProvider)
}

__all__ = [
    "ComProvider",
    "GatewayProvider",
    "HubProvider",
    "NowProvider",
    "PROVIDER_CLASSES",
]
