"""
Bullwhip Analysis (with Visualization)
======================================
Runs every policy under a preset scenario and plots order amplification,
inventories, the shock-magnitude sensitivity and the policy x scenario
heatmap.

Usage:
    python visual_bullwhip.py [SCENARIO_ID]
"""

import sys

import matplotlib.pyplot as plt
import numpy as np

from bullwhip import POLICIES, SCENARIOS
from bullwhip.analysis import compare_policies, policy_scenario_heatmap, sensitivity_sweep
from bullwhip.report import format_report, generate_report

TIER_COLORS = {"retailer": "#f59e0b", "wholesaler": "#38bdf8", "factory": "#a78bfa"}


def plot_orders(result, title):
    """Customer demand against the orders of every tier."""
    ticks = [h['tick'] for h in result['history']]
    plt.figure(figsize=(10, 5))
    plt.plot(ticks, [h['customer_demand'] for h in result['history']], 'k--', label="Customer demand")
    for tier, color in TIER_COLORS.items():
        plt.plot(ticks, [h[tier]['last_order_placed'] for h in result['history']],
                 color=color, label=f"{tier.title()} order ({result['bullwhip'][tier]:.2f}×)")
    plt.title(title)
    plt.xlabel("Tick"); plt.ylabel("Units")
    plt.legend(); plt.grid(True, alpha=0.3)
    plt.show()


def plot_inventories(result, title):
    ticks = [h['tick'] for h in result['history']]
    plt.figure(figsize=(10, 5))
    for tier, color in TIER_COLORS.items():
        plt.plot(ticks, [h[tier]['inventory'] for h in result['history']], color=color, label=tier.title())
    plt.title(title)
    plt.xlabel("Tick"); plt.ylabel("On-hand inventory")
    plt.legend(); plt.grid(True, alpha=0.3)
    plt.show()


def plot_factory_bullwhip(results):
    policies = [r['policy'] for r in results]
    ratios = [r['bullwhip']['factory'] for r in results]
    plt.figure(figsize=(7, 4))
    bars = plt.bar([POLICIES[p].short_label for p in policies], ratios,
                   color=[POLICIES[p].color for p in policies])
    bars[int(np.argmin(ratios))].set_edgecolor('black')
    plt.axhline(y=1.0, color='red', linestyle=':', alpha=0.5)
    plt.title("Factory Bullwhip Ratio (Lower is Better)")
    plt.ylabel("CoV(orders) / CoV(demand)")
    plt.grid(True, axis='y', alpha=0.4)
    plt.show()


def plot_sensitivity(rows):
    plt.figure(figsize=(9, 5))
    for policy in POLICIES.values():
        plt.plot([r['label'] for r in rows], [r[policy.id] for r in rows],
                 marker='o', color=policy.color, label=policy.label)
    plt.title("Factory Bullwhip Ratio vs Shock Magnitude")
    plt.xlabel("Shock magnitude"); plt.ylabel("Factory bullwhip")
    plt.legend(); plt.grid(True, alpha=0.3)
    plt.show()


def plot_heatmap(heat):
    data = np.array([[heat['grid'][p][s] for s in heat['scenarios']] for p in heat['policies']])
    fig, ax = plt.subplots(figsize=(8, 4))
    im = ax.imshow(data, cmap='RdYlGn_r')
    ax.set_xticks(range(len(heat['scenarios'])), [SCENARIOS[s].label for s in heat['scenarios']])
    ax.set_yticks(range(len(heat['policies'])), [POLICIES[p].short_label for p in heat['policies']])
    for i in range(data.shape[0]):
        for j in range(data.shape[1]):
            ax.text(j, i, f"{data[i, j]:.2f}×", ha='center', va='center')
    fig.colorbar(im, ax=ax, label="Factory bullwhip")
    ax.set_title("Policy × Scenario Heatmap")
    plt.show()


def main():
    scenario_id = sys.argv[1] if len(sys.argv) > 1 else "COVID_SHOCK"
    scenario = SCENARIOS[scenario_id].config

    print("\n=== BULLWHIP POLICY COMPARISON (With Graphs) ===\n")
    print(f"Scenario: {SCENARIOS[scenario_id].label} - {scenario}")

    results = compare_policies(scenario)

    print(f"\n{'Policy':<22} {'Retailer':>9} {'Wholesaler':>11} {'Factory':>9} "
          f"{'Avg Inv':>9} {'Stockouts':>10} {'Service %':>10} {'Peak':>6}")
    print("-" * 92)
    for r in results:
        bw = r['bullwhip']
        print(f"{POLICIES[r['policy']].label:<22} {bw['retailer']:>9.2f} {bw['wholesaler']:>11.2f} "
              f"{bw['factory']:>9.2f} {r['avg_inv']:>9.1f} {r['stockouts']:>10} "
              f"{r['service_level']:>10.1f} {r['factory_peak']:>6}")
    print("-" * 92)

    print("\n" + format_report(generate_report(results, scenario_id, scenario)))

    naive = next(r for r in results if r['policy'] == "NAIVE")
    plot_orders(naive, "Order Amplification - Naïve Reactive")
    plot_inventories(naive, "Inventory by Tier - Naïve Reactive")
    plot_factory_bullwhip(results)

    print("Sweeping shock magnitudes...")
    plot_sensitivity(sensitivity_sweep(scenario, max_workers=4))

    print("Building policy x scenario heatmap...")
    plot_heatmap(policy_scenario_heatmap(scenario, max_workers=4))


if __name__ == "__main__":
    main()
