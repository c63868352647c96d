import plotly.express as px
import pandas as pd

def export_latency_chart(timeline, path: str):
    if not timeline:
        with open(path, "w") as f:
            f.write("<h1>Access Latency</h1><p>No data to display.</p>")
        return

    df = pd.DataFrame(timeline)
    # Ensure numeric types for plotted columns, coercing errors
    df['index'] = pd.to_numeric(df['index'], errors='coerce')
    df['latency'] = pd.to_numeric(df['latency'], errors='coerce')
    df = df.dropna(subset=['index', 'latency'])
    df['cumulative'] = df['latency'].cumsum()

    hover_data_cols = ['address', 'frame', 'latency', 'cumulative']
    existing_hover_cols = [c for c in hover_data_cols if c in df.columns]

    fig = px.scatter(
        df,
        x="index",
        y="latency",
        color="served_by",
        hover_name="address",
        hover_data=existing_hover_cols,
        log_y=True,
        title="Memory Hierarchy Access Latency",
        labels={"index": "Access", "latency": "Latency (cycles)", "served_by": "Served By"},
    )

    fig.update_layout(
        height=500,
        font=dict(family="Courier New, monospace", size=12),
        legend_title="Served By"
    )

    fig.write_html(path, include_plotlyjs="cdn", full_html=True)

def export_served_ascii(served_counts):
    if not served_counts:
        return "No accesses."

    total = sum(served_counts.values())
    if total == 0:
        return "No accesses."

    chart = "Accesses by Serving Level (ASCII Histogram)\n"
    chart += "" + ("-" * 70) + "\n"

    scale = 50.0 / max(served_counts.values())
    for name, count in served_counts.items():
        bar = "#" * int(count * scale)
        chart += f"{name:>8} |{bar:<50} {count} ({count / total:.1%})\n"

    chart += "" + ("-" * 70) + "\n"
    chart += f"{total} accesses\n"

    return chart
