# Copyright (C) 2025 Richard Owen
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""Tests for engine configuration defaults and validation."""

import dataclasses

import pytest

from matchcast.engine.config import ENGINE_CONFIG, SimulationConfig


class TestSimulationConfig:
    """Tests for SimulationConfig."""

    def test_defaults(self) -> None:
        """Defaults compress a match into one minute of wall-clock time."""
        config = SimulationConfig()
        assert config.match_duration_ms == 60000
        assert config.event_frequency == 1.5
        assert config.injury_probability == 0.02
        assert config.card_probability == 0.05
        assert config.minute_interval == pytest.approx(60.0 / 90)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"match_duration_ms": 0},
            {"event_frequency": -0.1},
            {"injury_probability": 1.5},
            {"card_probability": -0.01},
        ],
    )
    def test_invalid_values_rejected(self, overrides: dict) -> None:
        """Values the clock or the rolls cannot use raise ``ValueError``."""
        with pytest.raises(ValueError):
            SimulationConfig(**overrides)

    def test_frozen(self) -> None:
        """Per-match settings cannot change once the match is built."""
        config = SimulationConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.event_frequency = 3.0  # type: ignore[misc]


class TestEngineConfig:
    """Tests for the shared tuning tables."""

    def test_weight_tables_cover_every_position(self) -> None:
        """Every position has an attack weight, a defense weight and fallbacks."""
        positions = ENGINE_CONFIG.positions
        assert set(positions.attack_weights) == set(positions.defense_weights) == set(positions.substitution_fallbacks)
        assert positions.attack_weights["ST"] == pytest.approx(0.9)
        assert positions.defense_weights["ST"] == pytest.approx(0.1)

    def test_substitution_windows(self) -> None:
        """Scheduled windows sit in the second half ahead of the final push."""
        subs = ENGINE_CONFIG.substitutions
        assert subs.max_substitutions == 5
        assert subs.scheduled_minutes == (55, 62, 70, 78, 85)
        assert subs.final_push_minutes == (88, 89)
