import os
import subprocess
import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parents[2] / "src"

_PROBE = """
import sys
from chronoscharts.analytics import ChartSettings, aggregate_by_period, calculate_stats
from chronoscharts.chart import ViewportController, build_chart_layout
import chronoscharts

assert calculate_stats([1.0, 2.0]).mean == 1.5
assert ViewportController(view_days=7, total_domain_days=30).max_offset == 23
print(any(k.startswith("plotly") for k in sys.modules))
"""


def test_imports_without_plotly():
    """Verify analytics and chart geometry imports do not import plotly as a side-effect.

    Plotly is installed (chart.figure needs it), and other tests in this
    session have already imported it, so the check runs in a fresh
    interpreter. Only chronoscharts.chart.figure may import plotly.
    """
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(p for p in (str(SRC_DIR), env.get("PYTHONPATH", "")) if p)
    result = subprocess.run(
        [sys.executable, "-c", _PROBE],
        capture_output=True,
        text=True,
        env=env,
        check=True,
    )
    # The actual requirement: the engine should not import plotly.
    assert result.stdout.strip() == "False"
