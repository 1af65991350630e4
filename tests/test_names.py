# tests/test_names.py

import unittest

from rivals_scout.names import extract_candidate_handles


class TestExtractCandidateHandles(unittest.TestCase):

    def test_blank_lines_and_padding_removed(self):
        self.assertEqual(extract_candidate_handles("Alice\n\nBob \n"), ["Alice", "Bob"])

    def test_empty_input_returns_empty_list(self):
        self.assertEqual(extract_candidate_handles(""), [])
        self.assertEqual(extract_candidate_handles(None), [])

    def test_whitespace_only_lines_dropped(self):
        self.assertEqual(extract_candidate_handles("   \n\t\n  Karage  \n \n"), ["Karage"])

    def test_duplicates_and_order_preserved(self):
        text = "Zeta\nAlpha\nZeta\nMid Name"
        self.assertEqual(extract_candidate_handles(text), ["Zeta", "Alpha", "Zeta", "Mid Name"])

    def test_windows_line_endings(self):
        self.assertEqual(extract_candidate_handles("One\r\nTwo\r\n"), ["One", "Two"])

    def test_output_never_longer_than_segments(self):
        samples = ["a\nb\nc", "\n\n\n", "x", "  lead\ntrail  \n\n"]
        for text in samples:
            handles = extract_candidate_handles(text)
            self.assertLessEqual(len(handles), len(text.split('\n')))
            self.assertTrue(all(h and h.strip() == h for h in handles))


if __name__ == '__main__':
    unittest.main()
