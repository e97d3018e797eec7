"""Tests for the root window and bootstrap screen widgets."""

from __future__ import annotations

import pytest

from langchat.app.services.offline_banner import BannerState
from langchat.config import OFFLINE_CHECKING, OFFLINE_STILL_OFFLINE
from langchat.domain.bootstrap import BootstrapDecision
from langchat.domain.retry import RetryState
from langchat.ui.widgets import OfflineBannerWidget, OfflineView, RootWindow

pytestmark = pytest.mark.gui


@pytest.fixture
def window(qtbot):
    win = RootWindow()
    qtbot.addWidget(win)
    return win


class TestRootWindow:
    def test_starts_on_loading(self, window: RootWindow) -> None:
        """Test the first visible root is the loading screen."""
        assert window.current_decision is BootstrapDecision.LOADING
        assert window.stack.currentWidget() is window.page_for(BootstrapDecision.LOADING)

    def test_exactly_one_root_visible(self, window: RootWindow) -> None:
        """Test switching replaces the page instead of stacking screens."""
        for decision in BootstrapDecision:
            window.show_decision(decision)
            assert window.stack.currentWidget() is window.page_for(decision)
            assert window.current_decision is decision

        assert window.stack.count() == len(BootstrapDecision)

    def test_offline_page_is_offline_view(self, window: RootWindow) -> None:
        assert window.page_for(BootstrapDecision.OFFLINE) is window.offline_view

    def test_retry_button_forwards_request(self, window: RootWindow, qtbot) -> None:
        """Test the offline button surfaces as the window's retry_requested."""
        window.show_decision(BootstrapDecision.OFFLINE)

        with qtbot.waitSignal(window.retry_requested, timeout=1000):
            window.offline_view.retry_button.click()

        assert window.offline_view.retry_button.isEnabled() is False

    def test_banner_hidden_behind_offline_screen(self, window: RootWindow) -> None:
        """Test the offline banner is redundant on the offline root."""
        window.show_decision(BootstrapDecision.OFFLINE)
        window.set_banner_state(BannerState.OFFLINE)
        assert window.banner.state is BannerState.HIDDEN

        window.show_decision(BootstrapDecision.MAIN_APP)
        window.set_banner_state(BannerState.OFFLINE)
        assert window.banner.state is BannerState.OFFLINE

    def test_banner_event_before_offline_root_is_hidden(self, window: RootWindow) -> None:
        """Test a disconnected banner that arrives before the offline root is hidden by it."""
        window.set_banner_state(BannerState.OFFLINE)
        assert window.banner.state is BannerState.OFFLINE

        window.show_decision(BootstrapDecision.OFFLINE)

        assert window.banner.state is BannerState.HIDDEN

    def test_leaving_offline_root_restores_banner(self, window: RootWindow) -> None:
        """Test the model's banner state comes back once the offline root is gone."""
        window.show_decision(BootstrapDecision.OFFLINE)
        window.set_banner_state(BannerState.OFFLINE)
        assert window.banner.state is BannerState.HIDDEN

        window.show_decision(BootstrapDecision.MAIN_APP)

        assert window.banner.state is BannerState.OFFLINE


class TestOfflineView:
    def test_countdown_text(self, qtbot) -> None:
        """Test the countdown label follows the scheduler's seconds."""
        view = OfflineView()
        qtbot.addWidget(view)

        view.set_countdown(5)
        assert "5" in view.countdown_label.text()

        view.set_countdown(0)
        assert view.countdown_label.text() == OFFLINE_CHECKING

    def test_button_disabled_while_probing(self, qtbot) -> None:
        """Test manual retry is unavailable during a probe."""
        view = OfflineView()
        qtbot.addWidget(view)

        view.set_retry_state(RetryState.PROBING)
        assert view.retry_button.isEnabled() is False

        view.set_retry_state(RetryState.SCHEDULED)
        assert view.retry_button.isEnabled() is True

    def test_probe_failure_message(self, qtbot) -> None:
        view = OfflineView()
        qtbot.addWidget(view)

        view.show_probe_failed(1, 4.5)

        assert view.retrying_label.text() == OFFLINE_STILL_OFFLINE


class TestOfflineBannerWidget:
    def test_states(self, qtbot) -> None:
        """Test visibility and text per banner state."""
        banner = OfflineBannerWidget()
        qtbot.addWidget(banner)
        banner.show()

        banner.set_banner_state(BannerState.HIDDEN)
        assert banner.isVisible() is False

        banner.set_banner_state(BannerState.OFFLINE)
        assert banner.isVisible() is True
        assert banner.text() == "No connection"

        banner.set_banner_state(BannerState.BACK_ONLINE)
        assert banner.text() == "Back online"
