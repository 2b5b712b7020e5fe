"""
Category expense chart.

The figure is rebuilt from scratch on every render; nothing is updated
in place.
"""

import plotly.graph_objects as go

from finance_tracker.presentation.formatting import format_currency
from finance_tracker.presentation.view_models import ChartData


TOOLTIP_BACKGROUND = "rgba(5, 150, 105, 0.9)"


def build_expense_chart(chart: ChartData) -> go.Figure:
    """Doughnut of expense per category with currency-formatted tooltips."""
    fig = go.Figure(
        go.Pie(
            labels=chart.labels,
            values=chart.values,
            hole=0.55,
            sort=False,
            direction="clockwise",
            textinfo="percent",
            marker=dict(
                colors=chart.colors,
                line=dict(color=chart.border_colors, width=2),
            ),
            customdata=[format_currency(v) for v in chart.values],
            hovertemplate="%{label}: %{customdata}<extra></extra>",
        )
    )

    fig.update_layout(
        showlegend=True,
        legend=dict(
            orientation="h",
            yanchor="top",
            y=-0.05,
            xanchor="center",
            x=0.5,
            font=dict(size=12, family="Poppins"),
        ),
        hoverlabel=dict(
            bgcolor=TOOLTIP_BACKGROUND,
            font_color="#FFF",
        ),
        paper_bgcolor="white",
        plot_bgcolor="white",
        margin=dict(l=10, r=10, t=20, b=20),
        height=360,
    )

    return fig
