"""
Report Module
=============
Narrative insight report built from the RunResults of a policy comparison.
"""

import datetime

from .demand import BASELINE_DEMAND, NOISE_SPAN, SEASONAL_AMPLITUDE
from .engine import HORIZON_TICKS
from .policies import POLICIES
from .scenarios import get_scenario


def _find(results, policy):
    return next((r for r in results if r['policy'] == policy), None)


def _fmt(result, key="factory"):
    return f"{result['bullwhip'][key]:.2f}" if result else "n/a"


def describe_demand(scenario):
    """One clause describing how customer demand behaved."""
    pattern = scenario.demand_pattern
    if pattern == "STEP_SHOCK":
        return (f"shifted abruptly at tick {scenario.shock_tick} "
                f"by a factor of ×{scenario.shock_magnitude}")
    if pattern == "SEASONAL":
        return f"followed a sinusoidal wave with amplitude ±{SEASONAL_AMPLITUDE} units per period"
    if pattern == "STOCHASTIC":
        return f"exhibited high-variance stochastic fluctuation (±{NOISE_SPAN // 2} units/period)"
    return f"remained constant at {BASELINE_DEMAND} units/period"


def generate_report(results, scenario_id, scenario, today=None):
    """
    Build the insight report.

    Args:
        results (list): RunResult dicts, normally one per policy
        scenario_id (str): Preset id the comparison ran under
        scenario (ScenarioConfig): Configuration actually used
        today (date): Report date (default: today)

    Returns:
        dict: {title, subtitle, sections: [{heading, body}]}, or None without results
    """
    if not results:
        return None

    preset = get_scenario(scenario_id)
    today = today or datetime.date.today()
    b = BASELINE_DEMAND

    ranked = sorted(results, key=lambda r: r['bullwhip']['factory'])
    best, worst = ranked[0], ranked[-1]
    naive = _find(results, "NAIVE")
    collab = _find(results, "COLLABORATIVE")
    base_stock = _find(results, "BASE_STOCK")

    bw_reduction = 0
    if naive and collab and naive['bullwhip']['factory']:
        bw_reduction = round((naive['bullwhip']['factory'] - collab['bullwhip']['factory'])
                             / naive['bullwhip']['factory'] * 100)
    stk_reduction = None
    if naive and collab and naive['stockouts'] > 0:
        stk_reduction = round((naive['stockouts'] - collab['stockouts']) / naive['stockouts'] * 100)
    svc_delta = round(collab['service_level'] - naive['service_level'], 1) if naive and collab else 0
    overshoot = round(naive['factory_peak'] / b * 100 - 100) if naive else 0
    lead_times = scenario.lead_times

    executive_summary = (
        f"This simulation analysed a three-tier supply chain (Retailer → Wholesaler → Factory) "
        f"across {len(results)} inventory ordering policies under the {preset.label} demand scenario. "
        f"{HORIZON_TICKS} discrete time-steps were run with lead times of {lead_times[0]}, "
        f"{lead_times[1]}, and {lead_times[2]} periods respectively.\n\n"
        f"The dominant finding is that information distortion, not demand volatility itself, is the "
        f"primary driver of supply chain instability. The factory-level bullwhip ratio ranged from "
        f"{_fmt(collab)}× (Collaborative) to {_fmt(naive)}× (Naïve Reactive), a {bw_reduction}% "
        f"improvement achieved simply by sharing the true demand signal upstream, with no structural "
        f"changes to inventory levels or lead times."
    )

    what_happened = (
        f"Under the {preset.label} scenario, customer demand {describe_demand(scenario)}. "
        f"Under the Naïve Reactive policy, this propagated upstream as order amplification: the "
        f"factory placed peak orders of {naive['factory_peak'] if naive else 'n/a'} units against a "
        f"baseline demand of {b}, a {overshoot}% overshoot.\n\n"
        f"This is the bullwhip effect in its classical form: each tier reacts to perceived rather than "
        f"actual demand, and the oscillations intensify upstream. Lead time is the transmission "
        f"mechanism. Longer pipeline delays force agents to order for a future they cannot observe."
    )

    comparison = (
        f"{POLICIES[best['policy']].label} was the highest-performing policy with a factory bullwhip "
        f"ratio of {_fmt(best)}× and a service level of {best['service_level']}%. "
        f"{POLICIES[worst['policy']].label} performed worst at {_fmt(worst)}× bullwhip.\n\n"
        f"The Base-Stock policy achieved {_fmt(base_stock)}× bullwhip by counting pipeline inventory "
        f"in the ordering calculation. With in-transit goods part of the inventory position, agents "
        f"avoid double-ordering during replenishment cycles."
    )

    stk_text = "Minimal" if stk_reduction is None else f"{stk_reduction}%"
    value_of_information = (
        f"The gap between Naïve and Collaborative policies isolates the value of demand signal "
        f"transparency. With no structural changes, only a shared point-of-sale demand signal, "
        f"the simulation achieved:\n\n"
        f"  • {bw_reduction}% reduction in factory bullwhip ratio ({_fmt(naive)}× → {_fmt(collab)}×)\n"
        f"  • {stk_text} reduction in total supply chain stockout units\n"
        f"  • {svc_delta:+} percentage points change in chain-wide service level\n\n"
        f"VMI (Vendor Managed Inventory) and CPFR are operationalisations of the Collaborative "
        f"policy at industrial scale."
    )

    return {
        'title': "Supply Chain Intelligence Report",
        'subtitle': f"Scenario: {preset.label} · {today.day} {today:%B %Y}",
        'sections': [
            {'heading': "Executive Summary", 'body': executive_summary},
            {'heading': "The Bullwhip Effect: What Happened", 'body': what_happened},
            {'heading': "Policy Comparison: Key Findings", 'body': comparison},
            {'heading': "The Quantified Value of Information Sharing", 'body': value_of_information},
        ],
    }


def format_report(report):
    """Plain-text rendering of a report."""
    if report is None:
        return ""
    lines = [report['title'], report['subtitle'], ""]
    for section in report['sections']:
        lines += [section['heading'].upper(), "-" * len(section['heading']), section['body'], ""]
    return "\n".join(lines)
