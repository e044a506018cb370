"""
Scenarios Module
================
Scenario configuration, the preset scenarios and the per-tier default
policy parameters used to build a chain.
"""


class ScenarioConfig:
    """
    Demand pattern and lead times of one simulation.

    Attributes:
        demand_pattern (str): STEP_SHOCK, STABLE, SEASONAL or STOCHASTIC
        shock_tick (int): Tick at which a STEP_SHOCK takes effect
        shock_magnitude (float): Demand multiplier after the shock
        retailer_lead_time (int): Lead time of the retailer's pipeline
        wholesaler_lead_time (int): Lead time of the wholesaler's pipeline
        factory_lead_time (int): Lead time of the factory's pipeline
    """

    def __init__(self, demand_pattern="STEP_SHOCK", shock_tick=20, shock_magnitude=2.2,
                 retailer_lead_time=2, wholesaler_lead_time=3, factory_lead_time=4):
        self.demand_pattern = demand_pattern
        self.shock_tick = shock_tick
        self.shock_magnitude = shock_magnitude
        self.retailer_lead_time = retailer_lead_time
        self.wholesaler_lead_time = wholesaler_lead_time
        self.factory_lead_time = factory_lead_time

    def __repr__(self):
        return (f"ScenarioConfig({self.demand_pattern}, shock={self.shock_tick}x{self.shock_magnitude}, "
                f"L={self.lead_times})")

    def __eq__(self, other):
        return isinstance(other, ScenarioConfig) and self.to_dict() == other.to_dict()

    @property
    def lead_times(self):
        return (self.retailer_lead_time, self.wholesaler_lead_time, self.factory_lead_time)

    def replace(self, **changes):
        """Return a new config with some fields changed."""
        values = self.to_dict()
        values.update(changes)
        return ScenarioConfig(**values)

    def to_dict(self):
        return {
            'demand_pattern': self.demand_pattern,
            'shock_tick': self.shock_tick,
            'shock_magnitude': self.shock_magnitude,
            'retailer_lead_time': self.retailer_lead_time,
            'wholesaler_lead_time': self.wholesaler_lead_time,
            'factory_lead_time': self.factory_lead_time,
        }


class Scenario:
    """A named preset ScenarioConfig."""
    def __init__(self, id, label, description, config):
        self.id = id
        self.label = label
        self.description = description
        self.config = config

    def __repr__(self):
        return f"Scenario {self.id} ({self.label})"


SCENARIOS = {
    "COVID_SHOCK": Scenario(
        "COVID_SHOCK", "COVID Demand Shock",
        "Sudden ×2.5 spike at tick 15, mimicking panic-buying disruption.",
        ScenarioConfig("STEP_SHOCK", 15, 2.5, 2, 4, 6)),
    "SEASONAL": Scenario(
        "SEASONAL", "Seasonal Ramp",
        "Sinusoidal wave: holiday demand cycle that rewards anticipatory policies.",
        ScenarioConfig("SEASONAL", 20, 1.5, 2, 3, 4)),
    "STABLE": Scenario(
        "STABLE", "Stable Baseline",
        "Flat demand: verifies steady-state stability and zero-drift behaviour.",
        ScenarioConfig("STABLE", 50, 1.0, 2, 3, 4)),
    "NOISE_STORM": Scenario(
        "NOISE_STORM", "Noise Storm",
        "High-variance stochastic demand: stress-tests all policies under maximum uncertainty.",
        ScenarioConfig("STOCHASTIC", 99, 1.0, 2, 3, 4)),
}

TIER_NAMES = ("Retailer", "Wholesaler", "Factory")

# Policy parameters per tier for batch runs (run_full_sim)
RUN_TIER_PARAMS = (
    {'reorder_point': 35, 'order_qty': 30, 'target_stock': 70, 'safety_buffer': 8},
    {'reorder_point': 50, 'order_qty': 40, 'target_stock': 90, 'safety_buffer': 12},
    {'reorder_point': 60, 'order_qty': 50, 'target_stock': 110, 'safety_buffer': 16},
)

# Policy parameters per tier for the live session
LIVE_TIER_PARAMS = (
    {'reorder_point': 35, 'order_qty': 30, 'target_stock': 70, 'safety_buffer': 8},
    {'reorder_point': 45, 'order_qty': 40, 'target_stock': 90, 'safety_buffer': 12},
    {'reorder_point': 55, 'order_qty': 50, 'target_stock': 110, 'safety_buffer': 16},
)


def get_scenario(scenario_id):
    """Look up a preset; unknown ids raise KeyError."""
    return SCENARIOS[scenario_id]


def scenario_for_pattern(demand_pattern):
    """First preset using the demand pattern, STABLE if none does."""
    for scenario_id, scenario in SCENARIOS.items():
        if scenario.config.demand_pattern == demand_pattern:
            return scenario_id
    return "STABLE"
