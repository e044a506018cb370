"""
Models Module
=============
Contains the state records of the supply chain: the in-transit pipeline
and the per-tier agent.
"""

from collections import deque

from .policies import POLICIES
from .utils import round_half_up


class Pipeline:
    """
    Fixed-depth delay queue of goods in transit to one tier.

    Attributes:
        lead_time (int): Configured lead time (ticks)
        queue (deque): Quantities in transit, oldest first. Its length is
            max(1, lead_time) and never changes.
    """

    def __init__(self, lead_time):
        self.lead_time = lead_time
        self.queue = deque([0] * max(1, lead_time))

    def __repr__(self):
        return f"Pipeline(L={self.lead_time}, queue={list(self.queue)})"

    def __len__(self):
        return len(self.queue)

    @property
    def in_transit(self):
        return sum(self.queue)

    def advance(self, order):
        """Ship `order` and return the quantity arriving this tick."""
        arrival = self.queue.popleft()
        self.queue.append(order)
        return arrival

    def copy(self):
        pipeline_copy = Pipeline(self.lead_time)
        pipeline_copy.queue = deque(self.queue)
        return pipeline_copy


class Agent:
    """
    Represents a single tier (Retailer, Wholesaler or Factory) of the chain.

    Attributes:
        name (str): Tier name
        tier (int): Position in the chain (0 = Retailer, 2 = Factory)
        lead_time (int): Shipment delay of the tier's replenishment orders
        policy (str): Ordering policy id, a key of POLICIES
        policy_params (dict): reorder_point, order_qty, target_stock, safety_buffer
        inventory (int): On-hand stock, never negative
        backlog (int): Unfulfilled demand carried forward
        last_demand (int): Demand observed in the latest tick
        last_order_placed (int): Order decided in the latest tick
        pipeline (Pipeline): Goods in transit to this tier
    """

    def __init__(self, name, tier, lead_time, initial_inventory, policy, policy_params=None):
        self.name = name
        self.tier = tier
        self.lead_time = lead_time
        self.policy = policy
        self.policy_params = policy_params or {}

        self.inventory = initial_inventory
        self.backlog = 0
        self.last_demand = 0
        self.last_order_placed = 0
        self.pipeline = Pipeline(lead_time)

        # Running totals for averages and service level
        self.total_stockouts = 0
        self.total_held = 0
        self.ticks = 0
        self.total_fulfilled = 0
        self.total_demand = 0

    def __repr__(self):
        return (f"{self.name} ({self.policy}): Inv={self.inventory}, B={self.backlog}, "
                f"Q={self.last_order_placed}, T={self.pipeline.in_transit}")

    @property
    def inventory_position(self):
        return self.inventory + self.pipeline.in_transit - self.backlog

    @property
    def avg_inventory(self):
        return self.total_held / self.ticks if self.ticks > 0 else self.inventory

    @property
    def service_level(self):
        return self.total_fulfilled / self.total_demand * 100 if self.total_demand > 0 else 100

    def fulfil(self, demand):
        """
        Ship what on-hand stock allows against demand plus backlog.

        Args:
            demand: Incoming demand this tick

        Returns:
            tuple: (fulfilled, unfulfilled)
        """
        obligation = demand + self.backlog
        fulfilled = min(self.inventory, obligation)
        unfulfilled = obligation - fulfilled

        if unfulfilled > 0:
            self.total_stockouts += unfulfilled

        self.inventory -= fulfilled
        self.backlog = unfulfilled
        self.last_demand = demand
        self.total_fulfilled += fulfilled
        self.total_demand += demand
        return fulfilled, unfulfilled

    def decide_order(self, shared=None):
        """
        Ask the tier's policy for this tick's replenishment order.

        Args:
            shared: True customer demand when the chain collaborates,
                otherwise None and the tier's own last demand is used

        Returns:
            int: Order quantity, also stored as last_order_placed
        """
        signal = self.last_demand if shared is None else shared
        qty = POLICIES[self.policy].compute(self, self.policy_params, signal)
        self.last_order_placed = round_half_up(max(0, qty))
        return self.last_order_placed

    def advance_pipeline(self, order):
        arrival = self.pipeline.advance(order)
        self.inventory += arrival
        self.total_held += self.inventory
        self.ticks += 1
        return arrival

    def snapshot(self):
        return {
            'name': self.name,
            'tier': self.tier,
            'inventory': round_half_up(self.inventory),
            'backlog': round_half_up(self.backlog),
            'last_order_placed': self.last_order_placed,
            'last_demand': self.last_demand,
            'in_transit': round_half_up(self.pipeline.in_transit),
        }

    def copy(self):
        """Create an independent copy of the agent for a tick to run against."""
        agent_copy = Agent(self.name, self.tier, self.lead_time, self.inventory,
                           self.policy, dict(self.policy_params))
        agent_copy.commit(self)
        return agent_copy

    def commit(self, other):
        """Take over the mutable state of `other` (a ticked copy of this agent)."""
        self.inventory = other.inventory
        self.backlog = other.backlog
        self.last_demand = other.last_demand
        self.last_order_placed = other.last_order_placed
        self.pipeline = other.pipeline.copy()
        self.total_stockouts = other.total_stockouts
        self.total_held = other.total_held
        self.ticks = other.ticks
        self.total_fulfilled = other.total_fulfilled
        self.total_demand = other.total_demand
