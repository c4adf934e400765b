"""Consumers - the reconciliation engine built on the core types.

Main entry point:
    from linksync.consumers import SyncEngine

    engine = SyncEngine(feed, catalog, audit=audit)
    result = engine.run_pass()
"""

from linksync.consumers.link_merge import merge_links
from linksync.consumers.naming import BrandedNameGenerator
from linksync.consumers.scheduler import CronScheduler
from linksync.consumers.sync import SyncEngine

__all__ = [
    "BrandedNameGenerator",
    "CronScheduler",
    "SyncEngine",
    "merge_links",
]
