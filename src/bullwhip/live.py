"""
Live Session Module
===================
State of an interactive simulation: configuration, live chain, rolling
history and the running flag. One tick is one indivisible step; pause and
resume happen between ticks.
"""

import logging
import time
import uuid

from .config import config as defaults
from .engine import HORIZON_TICKS, build_chain, step_chain
from .export import write_history_csv
from .scenarios import LIVE_TIER_PARAMS, ScenarioConfig, scenario_for_pattern
from .utils import TIERS, compute_bullwhip, round_places

logger = logging.getLogger(__name__)


INITIAL_BULLWHIP = {tier: 1.0 for tier in TIERS}

LIVE_DEFAULTS = {
    'retailer_policy': "NAIVE",
    'wholesaler_policy': "NAIVE",
    'factory_policy': "NAIVE",
    'demand_pattern': "STEP_SHOCK",
    'shock_tick': 20,
    'shock_magnitude': 2.2,
    'retailer_lead_time': 2,
    'wholesaler_lead_time': 3,
    'factory_lead_time': 4,
    'initial_inventory': defaults.initial_inventory,
    'speed': defaults.speed_ms,
}


class LiveSimulation:
    """
    Interactive simulation session.

    Attributes:
        config (dict): Live settings, see LIVE_DEFAULTS
        agents (list): Live [retailer, wholesaler, factory] chain
        history (list): Latest history records, at most config.history_window
        tick (int): Ticks executed since the last reset
        running (bool): Whether run() keeps stepping
        bullwhip (dict): Bullwhip ratios over the current history
        store (RunStore): Optional store receiving a summary at the horizon
    """

    def __init__(self, config=None, store=None):
        self.config = dict(LIVE_DEFAULTS)
        if config:
            self.config.update(config)
        self.store = store
        self.reset()

    def __repr__(self):
        return f"LiveSimulation(tick={self.tick}, running={self.running}, bullwhip={self.bullwhip})"

    @property
    def policies(self):
        return [self.config[f"{tier}_policy"] for tier in TIERS]

    @property
    def scenario(self):
        return ScenarioConfig(
            self.config['demand_pattern'], self.config['shock_tick'], self.config['shock_magnitude'],
            self.config['retailer_lead_time'], self.config['wholesaler_lead_time'],
            self.config['factory_lead_time'])

    @property
    def latest(self):
        return self.history[-1] if self.history else None

    @property
    def finished(self):
        return self.tick >= HORIZON_TICKS

    @property
    def shock_active(self):
        return self.tick >= self.config['shock_tick']

    def reset(self):
        """Discard the chain and start again from tick 0."""
        self.agents = build_chain(self.policies, self.scenario,
                                  self.config['initial_inventory'], LIVE_TIER_PARAMS)
        self.history = []
        self.tick = 0
        self.running = False
        self.bullwhip = dict(INITIAL_BULLWHIP)

    def update_config(self, **changes):
        """Apply new settings; the chain is rebuilt and the history cleared."""
        unknown = set(changes) - set(LIVE_DEFAULTS)
        if unknown:
            raise KeyError(f"Unknown live settings: {sorted(unknown)}")
        self.config.update(changes)
        self.reset()

    def start(self):
        self.running = True

    def pause(self):
        self.running = False

    def step(self):
        """
        Execute one tick against copies of the agents and commit them.

        Returns:
            dict: The new history record, or None once the horizon is reached
        """
        if self.finished:
            self.running = False
            return None

        record = step_chain(self.agents, self.tick + 1, self.scenario)
        self.tick += 1
        self.history = (self.history + [record])[-defaults.history_window:]
        self.bullwhip = compute_bullwhip(self.history)

        if self.finished:
            self.running = False
            if self.store is not None:
                self.store.save(self.run_summary())
        return record

    def run(self, max_ticks=None, sleep=time.sleep, on_tick=None):
        """
        Step at a fixed interval of config['speed'] ms while running.

        Args:
            max_ticks (int): Stop after this many ticks (default: the horizon)
            sleep: Function used to wait between ticks
            on_tick: Optional callback receiving each new record

        Returns:
            int: Number of ticks executed
        """
        executed = 0
        if self.finished:
            self.running = False
            return executed

        self.start()
        try:
            while self.running and not self.finished:
                if max_ticks is not None and executed >= max_ticks:
                    break
                record = self.step()
                executed += 1
                if on_tick is not None:
                    on_tick(record)
                if self.running and not self.finished:
                    sleep(self.config['speed'] / 1000)
        finally:
            # Not running once the loop is left, however it was left
            self.running = False
        return executed

    def run_summary(self):
        """Summary of the session persisted when the horizon is reached."""
        bw = compute_bullwhip(self.history)
        stockouts = sum(h['retailer']['backlog'] for h in self.history)
        total_demand = sum(h['customer_demand'] for h in self.history)
        service_level = round_places(100 - min(100, stockouts / max(1, total_demand) * 100), 1)
        timestamp = time.time()

        return {
            'id': f"{int(timestamp * 1000)}-{uuid.uuid4().hex[:6]}",
            'timestamp': timestamp,
            'scenario_id': scenario_for_pattern(self.config['demand_pattern']),
            'policies': self.policies,
            'factory_bw': bw['factory'],
            'stockouts': stockouts,
            'service_level': service_level,
            'config': {
                'shock_tick': self.config['shock_tick'],
                'shock_magnitude': self.config['shock_magnitude'],
            },
        }

    def load_run(self, run):
        """Restore the shock settings of a saved run summary."""
        if run.get('config'):
            self.update_config(shock_tick=run['config']['shock_tick'],
                               shock_magnitude=run['config']['shock_magnitude'])

    def export_csv(self, path):
        if not self.history:
            logger.info("Nothing to export, no ticks executed yet")
            return None
        return write_history_csv(self.history, path)
