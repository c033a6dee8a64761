import unittest
from unittest.mock import patch

from hnradar.tui import input as tui_input
from hnradar.tui.input import ResizeScreen, get_key
from hnradar.tui.keys import Key, event_for_key
from hnradar.tui.state import NavigateDown, NextPage, PrevPage, Quit, ToggleComments


@patch("hnradar.tui.input.sys.stdin.fileno", return_value=0)
@patch("hnradar.tui.input.select.select", return_value=([0], [], []))
@patch("hnradar.tui.input.os.read")
class TestGetKey(unittest.TestCase):
    def test_plain_letter(self, mock_read, mock_select, mock_fileno):
        mock_read.side_effect = [b"j"]
        self.assertEqual(get_key(), Key.J)

    def test_capital_letter_is_normalized(self, mock_read, mock_select, mock_fileno):
        mock_read.side_effect = [b"C"]
        self.assertEqual(get_key(), Key.C)

    def test_russian_layout(self, mock_read, mock_select, mock_fileno):
        # 'о' sits on the 'j' key
        mock_read.side_effect = [b"\xd0", b"\xbe"]
        self.assertEqual(get_key(), Key.J)

    def test_arrow_down(self, mock_read, mock_select, mock_fileno):
        mock_read.side_effect = [b"\x1b", b"[", b"B"]
        self.assertEqual(get_key(), Key.DOWN)

    def test_page_up(self, mock_read, mock_select, mock_fileno):
        mock_read.side_effect = [b"\x1b", b"[", b"5", b"~"]
        self.assertEqual(get_key(), Key.PAGE_UP)

    def test_page_down(self, mock_read, mock_select, mock_fileno):
        mock_read.side_effect = [b"\x1b", b"[", b"6", b"~"]
        self.assertEqual(get_key(), Key.PAGE_DOWN)

    def test_enter(self, mock_read, mock_select, mock_fileno):
        mock_read.side_effect = [b"\r"]
        self.assertEqual(get_key(), Key.ENTER)

    def test_timeout(self, mock_read, mock_select, mock_fileno):
        mock_select.return_value = ([], [], [])
        self.assertIsNone(get_key())
        mock_read.assert_not_called()

    def test_resize_raises(self, mock_read, mock_select, mock_fileno):
        tui_input.handle_winch(None, None)
        with self.assertRaises(ResizeScreen):
            get_key()
        mock_read.side_effect = [b"k"]
        self.assertEqual(get_key(), Key.K)


class TestKeyBindings(unittest.TestCase):
    def test_bound_keys(self):
        self.assertEqual(event_for_key(Key.J), NavigateDown())
        self.assertEqual(event_for_key(Key.DOWN), NavigateDown())
        self.assertEqual(event_for_key(Key.C), ToggleComments())
        self.assertEqual(event_for_key(Key.L), NextPage())
        self.assertEqual(event_for_key(Key.PAGE_DOWN), PrevPage())
        self.assertEqual(event_for_key(Key.CTRL_C), Quit())

    def test_unbound_keys(self):
        self.assertIsNone(event_for_key("x"))
        self.assertIsNone(event_for_key(None))


if __name__ == "__main__":
    unittest.main()
