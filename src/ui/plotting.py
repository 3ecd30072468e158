import matplotlib.patches as patches
import matplotlib.pyplot as plt


def _row_positions(x_min, x_max, n_bars):
    """Evenly spaced x positions for a single bar row, end bars at the limits."""
    if n_bars <= 1:
        return [(x_min + x_max) / 2]
    return [x_min + (x_max - x_min) * i / (n_bars - 1) for i in range(n_bars)]


def _draw_bar_row(ax, x_min, x_max, y, bars, color, label):
    if bars is None:
        ax.plot([x_min, x_max], [y, y], "-", color=color, linewidth=3)
    else:
        for x in _row_positions(x_min, x_max, bars.number):
            ax.add_patch(patches.Circle((x, y), bars.diameter / 2, color=color))
    ax.text((x_min + x_max) / 2, y, label, ha='center', va='bottom', color=color, fontsize=8)


def _outline(section):
    """Polygon of the section with the origin at the bottom-left of the web."""
    h = section.h
    if section.shape.value == "rectangular":
        return [(0, 0), (section.b, 0), (section.b, h), (0, h)], 0, section.b

    bf, bw, tf = section.bf, section.bw, section.tf
    x0 = (bf - bw) / 2
    points = [
        (x0, 0), (x0 + bw, 0), (x0 + bw, h - tf), (bf, h - tf),
        (bf, h), (0, h), (0, h - tf), (x0, h - tf),
    ]
    return points, x0, x0 + bw


def draw_section_design(section, result, negative_moment=False):
    """Sketch of the section with tension and compression steel (dimensions in mm)."""
    fig, ax = plt.subplots(figsize=(4, 4))
    points, web_left, web_right = _outline(section)
    ax.add_patch(patches.Polygon(points, closed=True, linewidth=2, edgecolor='#333333', facecolor='#e0e0e0'))

    cover = section.cover
    h = section.h
    x_min, x_max = web_left + cover, web_right - cover
    # Hogging moment puts the tension steel at the top.
    y_tension, y_compression = (h - cover, cover) if negative_moment else (cover, h - cover)

    if result.tension is not None:
        label = f"As: {result.tension.area:.0f} mm2"
        _draw_bar_row(ax, x_min, x_max, y_tension, result.tension.bars, 'red', label)
    if result.compression is not None:
        label = f"As': {result.compression.area:.0f} mm2"
        _draw_bar_row(ax, x_min, x_max, y_compression, result.compression.bars, 'blue', label)

    width = max(x for x, _ in points)
    margin = 0.05 * max(width, h)
    ax.set_xlim(-margin, width + margin)
    ax.set_ylim(-margin, h + margin)
    ax.set_aspect('equal')
    ax.axis('off')
    return fig
