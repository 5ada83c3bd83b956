from dataclasses import dataclass
from typing import Optional

from pagefetch.fetch.reader import BodyRead
from pagefetch.schemas import FetchRequest, FetchResponse

@dataclass(frozen=True)
class FetchResult:
    url: str
    status_code: int
    final_url: str
    content_type: Optional[str]  # header as sent, parameters included
    body: BodyRead
    elapsed_s: float

class BaseFetcher:
    async def fetch(self, request: FetchRequest) -> FetchResponse:
        raise NotImplementedError
