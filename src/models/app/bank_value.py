"""Bank value history models."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


def as_aware(value: datetime) -> datetime:
    """Attach UTC to naive datetimes; aware ones are returned unchanged."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class BankValue(BaseModel):
    """Value of a bank capture together with the tab it was taken from."""

    model_config = ConfigDict(frozen=True)

    bank_value: int = Field(..., description="Total bank value in coins")
    tab: int = Field(..., ge=0, le=9, description="Bank tab the capture came from")


class BankValuePoint(BaseModel):
    """A single time-stamped bank value reading for one account.

    Naive timestamps are read as UTC so points always compare against
    aware window bounds.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(..., description="When the bank value was captured")
    value: int = Field(..., description="Total bank value in coins")
    tab: int = Field(..., ge=0, le=9, description="Bank tab the capture came from")

    @field_validator("timestamp")
    @classmethod
    def _timestamp_aware(cls, v: datetime) -> datetime:
        return as_aware(v)


class BankValueHistory(BaseModel):
    """All recorded bank values for one account, in insertion order."""

    account_id: str = Field(..., description="Account the history belongs to")
    prices: dict[datetime, BankValue] = Field(
        default_factory=dict,
        description="Capture time mapped to the captured value and tab",
    )

    @field_validator("prices")
    @classmethod
    def _keys_aware(cls, v: dict[datetime, BankValue]) -> dict[datetime, BankValue]:
        return {as_aware(ts): entry for ts, entry in v.items()}

    def add(self, timestamp: datetime, value: int, tab: int) -> None:
        self.prices[as_aware(timestamp)] = BankValue(bank_value=value, tab=tab)

    def points(self) -> list[BankValuePoint]:
        """Flatten the mapping into points, keeping insertion order."""
        return [
            BankValuePoint(timestamp=ts, value=entry.bank_value, tab=entry.tab)
            for ts, entry in self.prices.items()
        ]

    def __len__(self) -> int:
        return len(self.prices)
