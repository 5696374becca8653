"""
Collector factory.

Creates collector instances by strategy name from a CollectorConfig.
"""

import logging
from typing import List

from ..models.config import CollectorConfig
from .base import AbstractProcessCollector

logger = logging.getLogger(__name__)

COLLECTOR_NAMES: List[str] = ["procfs", "procfs-parallel", "hybrid"]


class CollectorFactory:
    """
    Builds collectors for the configured proc root, user database and options.
    """

    def __init__(self, collector_config: CollectorConfig):
        """
        Initialize the collector factory.

        Args:
            collector_config: Shared construction settings for all strategies.
        """
        self.config = collector_config

        logger.info(
            f"CollectorFactory initialized: proc_root='{collector_config.proc_root}', "
            f"options={collector_config.options}"
        )

    def create_collector(self, name: str) -> AbstractProcessCollector:
        """
        Create a collector instance.

        Args:
            name: Strategy name, one of COLLECTOR_NAMES.

        Returns:
            A ready-to-use collector. The caller owns it and must close it.

        Raises:
            ValueError: If the strategy name is unknown
            BootTimeError: If the boot time cannot be read
        """
        common_kwargs = {
            "options": self.config.options,
            "proc_root": self.config.proc_root,
            "passwd_path": self.config.passwd_path,
        }

        if name == "procfs":
            from .procfs_collector import ProcFsCollector

            return ProcFsCollector(**common_kwargs)
        elif name == "procfs-parallel":
            from .parallel_collector import ParallelProcFsCollector

            return ParallelProcFsCollector(
                max_workers=self.config.max_workers,
                thread_name_prefix=self.config.thread_name_prefix,
                **common_kwargs,
            )
        elif name == "hybrid":
            from .hybrid_collector import HybridCollector

            return HybridCollector(**common_kwargs)
        else:
            raise ValueError(f"Unknown collector: {name}")
