from pydantic import BaseModel, ConfigDict, Field, computed_field


class Observation(BaseModel):
    """
    One parsed input record.
    Temperature is already converted to Fahrenheit, timestamp is in whole seconds.
    """

    model_config = ConfigDict(frozen=True)

    state_code: str = Field(min_length=2, max_length=2)
    timestamp: int
    humidity_pct: float = 0.0
    snow_present: int = 0
    cloud_cover_pct: float = 0.0
    lightning_strike: int = 0
    pressure_pa: float = 0.0
    temperature: float


class StateAggregate(BaseModel):
    """Running sums, counts and temperature extremes for one state code."""

    code: str = Field(min_length=2, max_length=2, frozen=True)
    record_count: int = Field(default=1, ge=1)

    humidity_sum: float = 0.0
    cloud_cover_sum: float = 0.0
    pressure_sum: float = 0.0
    temperature_sum: float = 0.0
    lightning_count: int = 0
    snow_count: int = 0

    max_temperature: float
    max_temperature_at: int
    min_temperature: float
    min_temperature_at: int

    @classmethod
    def from_observation(cls, obs: Observation) -> "StateAggregate":
        """Seed a new aggregate from the first observation of its state."""
        return cls(
            code=obs.state_code,
            record_count=1,
            humidity_sum=obs.humidity_pct,
            cloud_cover_sum=obs.cloud_cover_pct,
            pressure_sum=obs.pressure_pa,
            temperature_sum=obs.temperature,
            lightning_count=obs.lightning_strike,
            snow_count=obs.snow_present,
            max_temperature=obs.temperature,
            max_temperature_at=obs.timestamp,
            min_temperature=obs.temperature,
            min_temperature_at=obs.timestamp,
        )

    def fold(self, obs: Observation) -> None:
        """Merge one more observation of the same state into the running values.

        Extremes use last-equal-wins: a temperature equal to the current
        max (or min) still replaces it, together with its timestamp.
        """
        if obs.state_code != self.code:
            raise ValueError(f"Cannot fold observation for {obs.state_code} into {self.code}")

        self.record_count += 1
        self.humidity_sum += obs.humidity_pct
        self.cloud_cover_sum += obs.cloud_cover_pct
        self.pressure_sum += obs.pressure_pa
        self.temperature_sum += obs.temperature
        self.lightning_count += obs.lightning_strike
        self.snow_count += obs.snow_present

        if obs.temperature >= self.max_temperature:
            self.max_temperature = obs.temperature
            self.max_temperature_at = obs.timestamp

        if obs.temperature <= self.min_temperature:
            self.min_temperature = obs.temperature
            self.min_temperature_at = obs.timestamp

    # Averages are derived at report time, never stored.
    @computed_field
    @property
    def average_humidity(self) -> float:
        return self.humidity_sum / self.record_count

    @computed_field
    @property
    def average_temperature(self) -> float:
        return self.temperature_sum / self.record_count

    @computed_field
    @property
    def average_cloud_cover(self) -> float:
        return self.cloud_cover_sum / self.record_count

    @computed_field
    @property
    def average_pressure(self) -> float:
        return self.pressure_sum / self.record_count
