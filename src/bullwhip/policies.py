"""
Policies Module
===============
The four ordering policies an agent can delegate to. Each policy is a pure
function of the agent's local state, its parameters and a demand signal:

    order = policy(agent, params, signal)

POLICIES is a closed registry; looking up an unknown id raises KeyError.
"""

from collections import namedtuple


Policy = namedtuple("Policy", ["id", "label", "short_label", "description", "color", "compute"])

# Fallbacks when a tier's parameters leave a value out
DEFAULT_POLICY_PARAMS = {
    'reorder_point': 40,
    'order_qty': 30,
    'target_stock': 80,
    'safety_buffer': 10,
}


def naive_order_policy(agent, params, signal):
    """Mirror last observed demand."""
    return agent.last_demand


def fixed_reorder_policy(agent, params, signal):
    """(s, Q): order a batch when on-hand stock drops below the reorder point."""
    reorder_point = params.get('reorder_point', DEFAULT_POLICY_PARAMS['reorder_point'])
    order_qty = params.get('order_qty', DEFAULT_POLICY_PARAMS['order_qty'])
    return order_qty if agent.inventory < reorder_point else 0


def base_stock_policy(agent, params, signal):
    """
    Base-Stock Policy

    Tops the inventory position (on-hand + in transit - backlog) up to the
    target stock, so goods already in the pipeline are not ordered twice.
    """
    target = params.get('target_stock', DEFAULT_POLICY_PARAMS['target_stock'])
    return max(0, target - agent.inventory_position)


def collaborative_policy(agent, params, signal):
    """
    Collaborative Policy

    Like base-stock, but the target follows the shared demand signal:

        target = signal + safety_buffer

    When every tier collaborates the signal is the true customer demand
    instead of the downstream tier's (distorted) orders.
    """
    buffer = params.get('safety_buffer', DEFAULT_POLICY_PARAMS['safety_buffer'])
    return max(0, signal + buffer - agent.inventory_position)


POLICIES = {
    "NAIVE": Policy(
        "NAIVE", "Naïve Reactive", "NAÏVE",
        "Order exactly what was sold last period: pure reactive, zero foresight.",
        "#ef4444", naive_order_policy),
    "FIXED_REORDER": Policy(
        "FIXED_REORDER", "Fixed Reorder Point", "FIXED-ROP",
        "Order batch Q when on-hand stock drops below threshold S.",
        "#f59e0b", fixed_reorder_policy),
    "BASE_STOCK": Policy(
        "BASE_STOCK", "Base-Stock", "BASE-STK",
        "Target position T; order gap between T and (inventory + pipeline − backlog).",
        "#22c55e", base_stock_policy),
    "COLLABORATIVE": Policy(
        "COLLABORATIVE", "Collaborative", "COLLAB",
        "All tiers share the true customer demand signal, eliminating information distortion.",
        "#38bdf8", collaborative_policy),
}


def is_collaborative_chain(agents):
    """The shared signal is only used when the whole chain collaborates."""
    return all(a.policy == "COLLABORATIVE" for a in agents)
