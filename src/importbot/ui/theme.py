from __future__ import annotations

from nicegui import ui


def inject_theme() -> None:
    ui.add_head_html(
        """
        <style>
          body { background: linear-gradient(135deg, #f3f6fb, #fbfcff); }
          .ib-card { background: rgba(255,255,255,0.85); border: 1px solid rgba(30,64,175,0.10); border-radius: 12px; }
          .ib-primary { color: #1e40af; }
          .ib-subtle { color: rgba(30,64,175,0.70); }
          .q-linear-progress { border-radius: 6px; height: 10px; }
        </style>
        """
    )
