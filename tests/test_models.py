import pytest

from bullwhip.models import Agent, Pipeline


def make_agent(policy="NAIVE", inventory=60, lead_time=2, **params):
    return Agent("Retailer", 0, lead_time, inventory, policy, params)


@pytest.mark.parametrize("lead_time, depth", [(0, 1), (-3, 1), (1, 1), (4, 4)])
def test_pipeline_depth_is_clamped(lead_time, depth):
    assert len(Pipeline(lead_time)) == depth


def test_pipeline_advance_returns_oldest_and_keeps_length():
    p = Pipeline(3)
    arrivals = [p.advance(q) for q in (5, 7, 9, 11, 13)]
    assert arrivals == [0, 0, 0, 5, 7]
    assert len(p) == 3
    assert p.in_transit == 9 + 11 + 13


def test_pipeline_copy_is_independent():
    p = Pipeline(2)
    p.advance(4)
    p_copy = p.copy()
    p_copy.advance(8)
    assert list(p.queue) == [0, 4]
    assert list(p_copy.queue) == [4, 8]


def test_fulfil_with_enough_stock():
    agent = make_agent(inventory=60)
    assert agent.fulfil(20) == (20, 0)
    assert agent.inventory == 40
    assert agent.backlog == 0
    assert agent.last_demand == 20
    assert agent.total_stockouts == 0


def test_fulfil_shortfall_becomes_backlog():
    agent = make_agent(inventory=15)
    assert agent.fulfil(20) == (15, 5)
    assert agent.inventory == 0
    assert agent.backlog == 5
    assert agent.total_stockouts == 5

    # Backlog is served before new demand and counts again while unserved
    agent.fulfil(10)
    assert agent.backlog == 15
    assert agent.total_stockouts == 20
    assert agent.total_demand == 30
    assert agent.total_fulfilled == 15


def test_service_level_defaults_to_100():
    agent = make_agent()
    assert agent.service_level == 100
    agent.fulfil(0)
    assert agent.service_level == 100


def test_service_level_and_avg_inventory():
    agent = make_agent(inventory=10, lead_time=1)
    agent.fulfil(20)
    assert agent.service_level == 50.0
    agent.advance_pipeline(0)
    agent.advance_pipeline(0)
    assert agent.avg_inventory == 0
    assert agent.ticks == 2


def test_avg_inventory_before_first_tick_is_current_stock():
    assert make_agent(inventory=42).avg_inventory == 42


def test_decide_order_rounds_and_floors():
    agent = make_agent(policy="BASE_STOCK", inventory=100, target_stock=80)
    assert agent.decide_order() == 0
    assert agent.last_order_placed == 0

    agent = make_agent(policy="COLLABORATIVE", inventory=10, safety_buffer=0)
    assert agent.decide_order(shared=12.5) == 3


def test_decide_order_uses_own_demand_without_shared_signal():
    agent = make_agent(policy="COLLABORATIVE", inventory=0, safety_buffer=5)
    agent.fulfil(0)
    agent.last_demand = 7
    assert agent.decide_order() == 12
    assert agent.decide_order(shared=20) == 25


def test_advance_pipeline_adds_arrival_to_inventory():
    agent = make_agent(inventory=0, lead_time=1)
    assert agent.advance_pipeline(30) == 0
    assert agent.advance_pipeline(0) == 30
    assert agent.inventory == 30
    assert agent.total_held == 30


def test_copy_snapshot_matches_original():
    agent = make_agent(policy="BASE_STOCK", inventory=25, lead_time=3, target_stock=70)
    agent.fulfil(30)
    agent.advance_pipeline(agent.decide_order())

    before = agent.snapshot()
    agent_copy = agent.copy()
    assert agent_copy.snapshot() == before
    assert agent_copy.total_stockouts == agent.total_stockouts
    assert agent_copy.ticks == agent.ticks


def test_copy_does_not_share_state():
    agent = make_agent(lead_time=2)
    agent_copy = agent.copy()
    agent_copy.fulfil(20)
    agent_copy.advance_pipeline(agent_copy.decide_order())
    assert agent.inventory == 60
    assert agent.pipeline.in_transit == 0
    assert agent.last_order_placed == 0


def test_commit_takes_over_copy_state():
    agent = make_agent(lead_time=2)
    agent_copy = agent.copy()
    agent_copy.fulfil(20)
    agent_copy.advance_pipeline(agent_copy.decide_order())
    agent.commit(agent_copy)
    assert agent.snapshot() == agent_copy.snapshot()
    assert agent.pipeline is not agent_copy.pipeline


def test_unknown_policy_fails_hard():
    agent = make_agent(policy="MYSTERY")
    with pytest.raises(KeyError):
        agent.decide_order()
