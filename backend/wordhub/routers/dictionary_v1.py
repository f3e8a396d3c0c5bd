"""
v1 API：所有词典源共用的扁平 schema
"""

from wordhub.dependencies import get_v1_aggregator
from wordhub.enums import SchemaVersion

from .dictionary import create_router

router = create_router(SchemaVersion.V1, get_v1_aggregator)
