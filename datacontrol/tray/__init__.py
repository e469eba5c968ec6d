"""System tray shell for DataControl.

The tray owns a `ControlContext`, renders it into a pystray icon and menu,
and routes menu clicks back into `ControlContext.dispatch`.
"""
