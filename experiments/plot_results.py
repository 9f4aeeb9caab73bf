import pandas as pd
import matplotlib.pyplot as plt
from pathlib import Path

CSV_PATH = Path("experiments/results_convergence_vs_error_rate.csv")
OUT_PATH = Path("experiments/fig_convergence_vs_error_rate.png")

df = pd.read_csv(CSV_PATH)

print("CSV columns:", list(df.columns))

required = {"error_rate", "success_rate", "mean_iterations"}
missing = required - set(df.columns)
if missing:
    raise ValueError(f"Missing columns in {CSV_PATH}: {sorted(missing)}")

# --------------------------------------------------
# Plot
# --------------------------------------------------
fig, ax_iter = plt.subplots(figsize=(8, 4))

ax_iter.plot(df["error_rate"], df["mean_iterations"], marker="o", label="Mean iterations")
if "median_iterations" in df.columns:
    ax_iter.plot(df["error_rate"], df["median_iterations"], marker="s",
                 linestyle="--", label="Median iterations")
ax_iter.set_xlabel("Channel Error Rate")
ax_iter.set_ylabel("Iterations to Converge")
ax_iter.grid(True)

ax_success = ax_iter.twinx()
ax_success.plot(df["error_rate"], df["success_rate"], color="tab:red",
                marker="^", label="Success rate")
ax_success.set_ylabel("Success Rate")
ax_success.set_ylim(0.0, 1.05)

lines = ax_iter.get_legend_handles_labels()[0] + ax_success.get_legend_handles_labels()[0]
labels = ax_iter.get_legend_handles_labels()[1] + ax_success.get_legend_handles_labels()[1]
ax_iter.legend(lines, labels, loc="center right")

plt.title("Fixed-Point Convergence vs Channel Error Rate")
plt.tight_layout()

plt.savefig(OUT_PATH, dpi=200)
plt.show()

print(f"Saved plot → {OUT_PATH}")
