"""
jdk_registry.py
===============
Merge the enumerator outputs into one ordered JDK list.
"""

from __future__ import annotations

import logging
from typing import List

from jdk_sources import JavaHomeSource, JdkRecord, JenvSource

logger = logging.getLogger(__name__)


def aggregate(java_home: JavaHomeSource, jenv: JenvSource) -> List[JdkRecord]:
    """
    Return java_home records followed by jenv records.

    Each source keeps its own order. Installs visible through both sources
    are listed twice; callers that display the list rely on seeing both.
    """
    records = java_home.list() + jenv.list()
    logger.info("Total discovered: %d JDK installation(s)", len(records))
    return records
