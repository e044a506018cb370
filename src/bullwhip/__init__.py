"""
Bullwhip Package
================
This package contains the discrete-time simulation of a three-tier supply
chain (Retailer -> Wholesaler -> Factory) and the metrics quantifying the
bullwhip effect.

Modules:
    models - State records (Pipeline, Agent)
    policies - Ordering policies (NAIVE, FIXED_REORDER, BASE_STOCK, COLLABORATIVE)
    demand - Customer demand patterns
    scenarios - Scenario configuration and presets
    engine - Tick engine and 100-tick runs
    utils - Rounding and bullwhip metrics

Consumers:
    live - Interactive session with pause/resume
    analysis - Policy comparison, sensitivity sweep, heatmap
    report - Narrative insight report
    export - CSV export and saved runs
"""

from .analysis import compare_policies, policy_scenario_heatmap, sensitivity_sweep
from .demand import generate_demand
from .engine import build_chain, run_full_sim, step_chain, tick_sim
from .export import RunStore, write_history_csv
from .live import LiveSimulation
from .models import Agent, Pipeline
from .policies import POLICIES
from .report import generate_report
from .scenarios import SCENARIOS, ScenarioConfig
from .utils import coef_var, compute_bullwhip

__all__ = [
    'Agent',
    'Pipeline',
    'POLICIES',
    'SCENARIOS',
    'ScenarioConfig',
    'generate_demand',
    'build_chain',
    'tick_sim',
    'step_chain',
    'run_full_sim',
    'coef_var',
    'compute_bullwhip',
    'LiveSimulation',
    'compare_policies',
    'sensitivity_sweep',
    'policy_scenario_heatmap',
    'generate_report',
    'RunStore',
    'write_history_csv',
]
