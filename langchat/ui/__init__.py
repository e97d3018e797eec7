"""Qt (PyQt5) shell: root window, bootstrap screens and the presenter adapter.

Widgets only ever run on the Qt main thread; services reach them through
ui.adapters.qt_root_presenter.
"""
