"""
Engine Module
=============
Tick engine and 100-tick run orchestration for the three-tier chain.

Each tick runs, in this order, for chain [R, W, F]:
    1. customer demand d
    2. R.fulfil(d)
    3. W.fulfil(R.last_order_placed)   (R's order from the previous tick)
    4. F.fulfil(W.last_order_placed)   (W's order from the previous tick)
    5. every tier decides its order
    6. every tier advances its pipeline with that order

Fulfilling before deciding is what delays every upstream tier's view of
its neighbour's orders by one tick, on top of the shipment lead time.
"""

import logging

import numpy as np

from .demand import generate_demand
from .models import Agent
from .policies import is_collaborative_chain
from .scenarios import RUN_TIER_PARAMS, TIER_NAMES
from .utils import TIERS, compute_bullwhip, round_places

logger = logging.getLogger(__name__)


# Every full run covers exactly this many ticks
HORIZON_TICKS = 100


def build_chain(policies, scenario, initial_inventory=60, tier_params=RUN_TIER_PARAMS):
    """
    Build a fresh [Retailer, Wholesaler, Factory] chain.

    Args:
        policies: One policy id for every tier, or a sequence of three ids
        scenario (ScenarioConfig): Supplies the per-tier lead times
        initial_inventory (int): Starting on-hand stock of each tier
        tier_params: Policy parameters for each tier

    Returns:
        list: Three Agent objects
    """
    if isinstance(policies, str):
        policies = (policies,) * len(TIER_NAMES)

    return [
        Agent(name, tier, lead_time, initial_inventory, policy, dict(params))
        for tier, (name, lead_time, policy, params)
        in enumerate(zip(TIER_NAMES, scenario.lead_times, policies, tier_params))
    ]


def tick_sim(agents, tick, scenario, demand=None):
    """
    Advance a chain by one tick, mutating its agents in place.

    Args:
        agents (list): [retailer, wholesaler, factory]
        tick (int): Tick number, used to generate demand
        scenario (ScenarioConfig): Demand pattern and shock parameters
        demand (int): Optional externally supplied customer demand

    Returns:
        dict: History record of the tick
    """
    retailer, wholesaler, factory = agents
    if demand is None:
        demand = generate_demand(tick, scenario.demand_pattern,
                                 scenario.shock_tick, scenario.shock_magnitude)
    shared = demand if is_collaborative_chain(agents) else None

    retailer.fulfil(demand)
    wholesaler.fulfil(retailer.last_order_placed)
    factory.fulfil(wholesaler.last_order_placed)

    orders = [a.decide_order(shared) for a in agents]
    for agent, order in zip(agents, orders):
        agent.advance_pipeline(order)

    return {
        'tick': tick,
        'customer_demand': demand,
        'retailer': retailer.snapshot(),
        'wholesaler': wholesaler.snapshot(),
        'factory': factory.snapshot(),
    }


def step_chain(agents, tick, scenario, demand=None):
    """
    Tick copies of the agents, then commit the copies into the live chain.

    The returned record is built entirely from the copies, so it never sees
    the live agents half-updated.
    """
    copies = [a.copy() for a in agents]
    record = tick_sim(copies, tick, scenario, demand)
    for agent, agent_copy in zip(agents, copies):
        agent.commit(agent_copy)
    return record


def summarize_run(policy, agents, history):
    """Aggregate metrics of a finished run."""
    inventories = np.array([[h[tier]['inventory'] for tier in TIERS] for h in history], dtype=float)
    factory_orders = [h['factory']['last_order_placed'] for h in history]

    return {
        'policy': policy,
        'history': history,
        'bullwhip': compute_bullwhip(history),
        'avg_inv': round_places(float(inventories.mean()), 1) if history else 0.0,
        'stockouts': sum(a.total_stockouts for a in agents),
        'service_level': round_places(sum(a.service_level for a in agents) / len(agents), 1),
        'factory_peak': max(factory_orders) if factory_orders else 0,
    }


def run_full_sim(policy, scenario):
    """
    Full run of one policy applied to every tier.

    Args:
        policy (str): Policy id, a key of POLICIES
        scenario (ScenarioConfig): Demand pattern, shock and lead times

    Returns:
        dict: policy, history (one record per tick), bullwhip, avg_inv,
              stockouts, service_level, factory_peak
    """
    agents = build_chain(policy, scenario)
    history = []

    for t in range(1, HORIZON_TICKS + 1):
        history.append(step_chain(agents, t, scenario))

    result = summarize_run(policy, agents, history)
    logger.debug("Run %s on %r: bullwhip=%s service=%.1f%%",
                 policy, scenario, result['bullwhip'], result['service_level'])
    return result
