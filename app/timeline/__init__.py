"""
timeline/ - score-to-position layout and hover hit testing

Modules:
    layout.py  - position, collision stagger, full layout pass
    hover.py   - pointer hit test, hover suppression, HoverTracker
"""
