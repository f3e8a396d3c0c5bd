"""
v2 API：各词典源专用的 schema；聚合响应还会列出实际查询的词典源
"""

from wordhub.dependencies import get_v2_aggregator
from wordhub.enums import SchemaVersion

from .dictionary import create_router

router = create_router(SchemaVersion.V2, get_v2_aggregator, include_sources=True)
