"""Plotly rendering of a ChartLayout.

Returns a Plotly figure dict (never go.Figure). The figure's axes are the
layout's pixel space, so the smoothed paths, band rectangles and gridlines
are drawn as shapes exactly where build_chart_layout() placed them.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

import plotly.graph_objects as go

from chronoscharts.chart.layout import ChartLayout
from chronoscharts.chart.theme import (
    ThemeMode,
    get_band_color,
    get_grid_color,
    get_theme_colors,
    get_theme_template,
    resolve_theme,
)


def plotly_dash(dash: Sequence[float]) -> str:
    """Stroke dash pattern as a Plotly dash string ('solid' when empty)."""
    if not dash:
        return "solid"
    return ",".join(f"{d:g}px" for d in dash)


def chart_figure_dict(
    layout: Optional[ChartLayout],
    theme: Optional[Union[str, ThemeMode]] = None,
    show_legend: bool = True,
) -> dict:
    """Create a Plotly figure for a chart layout.

    Args:
        layout: Chart geometry, or None for an empty plot.
        theme: Theme mode (DARK or LIGHT). Defaults to LIGHT if None.
        show_legend: Show one legend entry per dataset.

    Returns:
        Plotly figure dict.
    """
    theme_mode = resolve_theme(theme) if theme is not None else ThemeMode.LIGHT
    template = get_theme_template(theme_mode)
    bg_color, fg_color = get_theme_colors(theme_mode)

    fig = go.Figure()
    if layout is None:
        fig.update_layout(
            template=template,
            paper_bgcolor=bg_color,
            plot_bgcolor=bg_color,
            font=dict(color=fg_color),
        )
        return fig.to_dict()

    grid_color = get_grid_color(theme_mode)
    band_color = get_band_color(theme_mode)
    options = layout.options

    # month bands (behind everything)
    for band in layout.bands:
        fig.add_shape(
            type="rect",
            x0=band.x0,
            x1=band.x1,
            y0=layout.plot_top,
            y1=layout.plot_bottom,
            fillcolor=band_color,
            line_width=0,
            layer="below",
        )

    # horizontal gridlines at the value ticks
    for tick in layout.y_ticks:
        fig.add_shape(
            type="line",
            x0=layout.plot_left,
            x1=layout.plot_right,
            y0=tick.position,
            y1=tick.position,
            line=dict(color=grid_color, width=1),
            layer="below",
        )

    for ds in layout.datasets:
        if ds.segments:
            fig.add_shape(
                type="path",
                path=ds.svg_path,
                line=dict(color=ds.color, width=ds.line_width, dash=plotly_dash(ds.dash)),
            )
        # markers double as the legend entry
        xs = [x for x, _ in ds.markers] or [None]
        ys = [y for _, y in ds.markers] or [None]
        fig.add_trace(
            go.Scatter(
                x=xs,
                y=ys,
                name=ds.label,
                mode="markers",
                marker=dict(color=ds.color, size=options.point_radius * 2),
                hoverinfo="skip" if not ds.markers else "name",
            )
        )

    fig.update_layout(
        template=template,
        width=options.width,
        height=options.height,
        paper_bgcolor=bg_color,
        plot_bgcolor=bg_color,
        font=dict(color=fg_color),
        xaxis=dict(
            range=[0, options.width],
            tickmode="array",
            tickvals=[t.position for t in layout.x_ticks],
            ticktext=[t.label for t in layout.x_ticks],
            showgrid=False,
            zeroline=False,
            color=fg_color,
            fixedrange=True,
        ),
        yaxis=dict(
            # pixel space: y grows downwards
            range=[options.height, 0],
            tickmode="array",
            tickvals=[t.position for t in layout.y_ticks],
            ticktext=[t.label for t in layout.y_ticks],
            showgrid=False,
            zeroline=False,
            color=fg_color,
            fixedrange=True,
        ),
        margin=dict(l=0, r=0, t=0, b=0),
        showlegend=show_legend,
    )

    return fig.to_dict()
