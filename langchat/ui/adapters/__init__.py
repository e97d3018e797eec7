"""Qt adapters implementing app/ports."""

from langchat.ui.adapters.qt_root_presenter import QtRootPresenter

__all__ = ["QtRootPresenter"]
