"""Unit tests for julius_e2e.browser.helper: ActionHelper retry semantics."""

from __future__ import annotations

from unittest.mock import MagicMock, call, patch

import pytest
from playwright.sync_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeout

from julius_e2e.browser.helper import ActionHelper


@pytest.fixture()
def helper(mock_page, fast_helper_settings) -> ActionHelper:
    return ActionHelper(mock_page, fast_helper_settings)


class TestClosedPage:
    def test_actions_are_skipped_on_closed_page(self, mock_page, helper) -> None:
        mock_page.is_closed.return_value = True

        helper.click("#save")
        helper.fill("#name", "x")
        helper.wait_for_visible("#name")

        mock_page.click.assert_not_called()
        mock_page.locator.assert_not_called()

    def test_is_visible_false_on_closed_page(self, mock_page, helper) -> None:
        mock_page.is_closed.return_value = True
        assert helper.is_visible("#logo") is False

    def test_is_page_open_false_when_check_raises(self, mock_page, helper) -> None:
        mock_page.is_closed.side_effect = PlaywrightError("Target closed")
        assert helper.is_page_open() is False


class TestWaitForNavigation:
    def test_timeouts_are_swallowed(self, mock_page, helper) -> None:
        mock_page.wait_for_load_state.side_effect = PlaywrightTimeout("slow")

        helper.wait_for_navigation()

        states = [c.args[0] for c in mock_page.wait_for_load_state.call_args_list]
        assert states == ["domcontentloaded", "networkidle", "domcontentloaded"]

    def test_networkidle_timeout_never_zero(self, mock_page, helper) -> None:
        helper.wait_for_navigation(500)

        mock_page.wait_for_load_state.assert_any_call("networkidle", timeout=1_000)

    def test_other_errors_are_logged_not_raised(self, mock_page, helper, caplog) -> None:
        mock_page.wait_for_load_state.side_effect = PlaywrightError("Target closed")

        helper.wait_for_navigation()

        assert "Error waiting for navigation" in caplog.text


class TestWaitForVisible:
    def test_per_try_timeout_shrinks_and_is_capped(self, mock_page, helper) -> None:
        locator = mock_page.locator.return_value
        locator.wait_for.side_effect = PlaywrightTimeout("hidden")

        with pytest.raises(PlaywrightTimeout):
            helper.wait_for_visible("#name", 3_000)

        timeouts = [c.kwargs["timeout"] for c in locator.wait_for.call_args_list]
        assert timeouts == [1_000, 1_500, 2_000]

    def test_recovers_on_second_try(self, mock_page, helper) -> None:
        locator = mock_page.locator.return_value
        locator.wait_for.side_effect = [PlaywrightTimeout("hidden"), None]

        helper.wait_for_visible("#name")

        assert locator.wait_for.call_count == 2

    def test_accepts_locator_target(self, mock_page, helper) -> None:
        target = MagicMock(name="locator")

        helper.wait_for_visible(target)

        target.wait_for.assert_called_once_with(state="visible", timeout=2_000)
        mock_page.locator.assert_not_called()


class TestClick:
    def test_clicks_selector_once(self, mock_page, helper) -> None:
        helper.click("#save")

        mock_page.click.assert_called_once_with("#save", timeout=2_000, force=False)

    def test_falls_back_to_scrolled_locator_click(self, mock_page, helper) -> None:
        mock_page.click.side_effect = PlaywrightError("element is covered")
        locator = mock_page.locator.return_value

        helper.click("#save")

        locator.scroll_into_view_if_needed.assert_called_once()
        locator.click.assert_called_once_with(timeout=2_000, force=False)

    def test_last_attempt_is_forced_then_raises(self, mock_page, helper) -> None:
        mock_page.click.side_effect = PlaywrightError("element is covered")
        mock_page.locator.return_value.click.side_effect = PlaywrightError("still covered")

        with pytest.raises(PlaywrightError):
            helper.click("#save")

        forced = [c.kwargs["force"] for c in mock_page.click.call_args_list]
        assert forced == [False, False, True]

    def test_locator_target_is_clicked_directly(self, mock_page, helper) -> None:
        target = MagicMock(name="locator")

        helper.click(target)

        target.click.assert_called_once_with(timeout=2_000, force=False)
        mock_page.click.assert_not_called()


class TestFill:
    def test_clears_then_fills(self, mock_page, helper) -> None:
        locator = mock_page.locator.return_value

        helper.fill("#name", "Project_Automation_12345")

        assert locator.fill.call_args_list == [
            call("", timeout=2_000),
            call("Project_Automation_12345", timeout=2_000),
        ]

    def test_falls_back_to_typing(self, mock_page, helper) -> None:
        locator = mock_page.locator.return_value
        locator.fill.side_effect = PlaywrightError("not an input")

        helper.fill("#name", "hello")

        locator.click.assert_called_once_with(click_count=3, timeout=500)
        mock_page.keyboard.press.assert_called_once_with("Backspace")
        locator.press_sequentially.assert_called_once_with("hello", timeout=2_000)

    def test_raises_after_all_attempts(self, mock_page, helper) -> None:
        locator = mock_page.locator.return_value
        locator.fill.side_effect = PlaywrightError("detached")
        locator.click.side_effect = PlaywrightError("detached")

        with pytest.raises(PlaywrightError):
            helper.fill("#name", "hello")

        assert locator.click.call_count == 3


class TestTyping:
    def test_type_slowly_uses_configured_delay(self, mock_page, helper) -> None:
        locator = mock_page.locator.return_value

        helper.type_slowly("#search", "Selena")

        locator.fill.assert_called_once_with("")
        locator.press_sequentially.assert_called_once_with("Selena", delay=10)

    def test_type_slowly_delay_override(self, mock_page, helper) -> None:
        helper.type_slowly("#search", "Selena", delay_ms=0)

        mock_page.locator.return_value.press_sequentially.assert_called_once_with("Selena", delay=0)


class TestVisibilityAndWaits:
    def test_is_visible_false_on_timeout(self, mock_page, helper) -> None:
        mock_page.locator.return_value.wait_for.side_effect = PlaywrightTimeout("hidden")

        assert helper.is_visible("#logo", 300) is False

    def test_is_visible_true(self, helper) -> None:
        assert helper.is_visible("#logo") is True

    def test_wait_for_hidden_reraises(self, mock_page, helper) -> None:
        mock_page.locator.return_value.wait_for.side_effect = PlaywrightTimeout("still visible")

        with pytest.raises(PlaywrightTimeout):
            helper.wait_for_hidden(".spinner")

    def test_wait_for_enabled(self, mock_page, helper) -> None:
        with patch("julius_e2e.browser.helper.expect") as mock_expect:
            helper.wait_for_enabled("#name")

        locator = mock_page.locator.return_value
        locator.wait_for.assert_called_once_with(state="visible", timeout=2_000)
        mock_expect.assert_called_once_with(locator)
        mock_expect.return_value.to_be_enabled.assert_called_once_with(timeout=7_000)

    def test_wait_for_enabled_retries_once(self, mock_page, helper) -> None:
        with patch("julius_e2e.browser.helper.expect") as mock_expect:
            mock_expect.return_value.to_be_enabled.side_effect = [AssertionError("disabled"), None]
            helper.wait_for_enabled("#name", 300)

        assert mock_expect.return_value.to_be_enabled.call_args_list[-1] == call(timeout=500)
        assert mock_page.locator.return_value.wait_for.call_count == 2

    def test_expect_response_delegates(self, mock_page, helper) -> None:
        predicate = lambda r: True  # noqa: E731

        helper.expect_response(predicate, timeout_ms=1_234)

        mock_page.expect_response.assert_called_once_with(predicate, timeout=1_234)
