# ABOUTME: Pydantic result models returned by the non-raising save file loader
# ABOUTME: A load either carries every building or a tagged transport/format failure

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel


class FailureKind(str, Enum):
    TRANSPORT = "transport"
    FORMAT = "format"


class LoadFailure(BaseModel):
    """Why a load failed; ``detail`` is diagnostic text only"""

    kind: FailureKind
    detail: str = ""


class LoadResult(BaseModel):
    buildings: List[Any] = []
    failure: Optional[LoadFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None
