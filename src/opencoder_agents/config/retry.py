"""Retry and recovery configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorRecoveryConfig(BaseModel):
    """Configuration for retrying mutating filesystem operations.

    Attributes:
        max_attempts: Total attempts per operation, including the first one.
        initial_backoff_seconds: Delay before the first retry.
        max_backoff_seconds: Upper bound for a single delay.
    """

    max_attempts: int = Field(
        default=4,
        ge=1,
        description="Total attempts per operation (first attempt included)",
    )
    initial_backoff_seconds: float = Field(
        default=0.1,
        ge=0.0,
        description="Delay before the first retry; doubles on each further retry",
    )
    max_backoff_seconds: float = Field(
        default=2.0,
        ge=0.0,
        description="Maximum delay between two attempts",
    )
