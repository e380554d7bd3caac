"""Configuration via environment variables."""

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings


class Transport(str, Enum):
    STDIO = "stdio"
    STREAMABLE_HTTP = "streamable-http"


class SearchConfig(BaseModel):
    """Tunables for the match engine. Defaults reproduce the stock behaviour."""

    model_config = ConfigDict(frozen=True)

    max_segments: int = 3
    two_segment_min_coverage: float = 0.7
    three_segment_min_coverage: float = 0.8
    three_segment_min_tokens: int = 4
    min_token_length: int = 3
    # How many of the best-covering segments are expanded at each step.
    candidate_beam_width: int = 8

    similarity_weight: float = 0.4
    coverage_weight: float = 0.4
    coherence_weight: float = 0.1
    context_weight: float = 0.1
    multi_segment_coherence_discount: float = 0.8
    multi_segment_context_discount: float = 0.75
    # Combinations need a blended score of at least threshold * factor.
    combination_threshold_factor: float = 95

    rank_score_tolerance: float = 5
    rank_coherence_tolerance: float = 0.1
    splice_delimiter: str = " [...] "


class Settings(BaseSettings):
    model_config = {"env_prefix": "FRANKENBITE_"}

    max_segments: int = 3
    candidate_beam_width: int = 8
    store_max_size: int = 20
    store_ttl_seconds: int = 6 * 3600
    history_max_size: int = 10
    history_file: str = ""
    rate_limit_per_minute: int = 30
    transport: Transport = Transport.STDIO

    def search_config(self) -> SearchConfig:
        return SearchConfig(
            max_segments=self.max_segments,
            candidate_beam_width=self.candidate_beam_width,
        )

