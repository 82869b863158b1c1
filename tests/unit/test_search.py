import time
import unittest

from organaizer.search import (
    NO_KEYWORDS_NOTE,
    NO_MATCHES_NOTE,
    SearchMatch,
    calculate_similarity,
    extract_keywords,
    find_best_file_name_match,
    parse_ai_search_response,
    perform_basic_keyword_search,
)


def make_file(name, path=None):
    node = {"type": "file", "name": name, "path": path or f"/docs/{name}", "stats": {"size": 1, "mtime": 0}}
    if "." in name:
        node["extension"] = "." + name.rsplit(".", 1)[1].lower()
    return node


class TestKeywordSearch(unittest.TestCase):
    def test_short_tokens_only(self):
        files = [make_file("to.do"), make_file("a.txt")]
        self.assertEqual(perform_basic_keyword_search(files, "a to of"), {"note": NO_KEYWORDS_NOTE})
        self.assertEqual(perform_basic_keyword_search(files, None), {"note": NO_KEYWORDS_NOTE})

    def test_no_matches(self):
        self.assertEqual(perform_basic_keyword_search([make_file("a.txt")], "invoice"), {"note": NO_MATCHES_NOTE})

    def test_score_formula(self):
        # "invoice" appears in name and path: 1 keyword matched, 2 occurrences
        results = perform_basic_keyword_search([make_file("invoice.pdf")], "invoice")
        self.assertEqual(len(results), 1)
        self.assertEqual(results[0].relevance_score, 100)

        # 1 of 2 keywords, 2 occurrences: 35 + 30
        results = perform_basic_keyword_search([make_file("invoice.pdf")], "invoice march")
        self.assertEqual(results[0].relevance_score, 65)
        self.assertEqual(results[0].reason, "Contains 1 of the searched keywords")

    def test_rounding_half_up(self):
        # 1 of 4 keywords with 1 occurrence: 17.5 + 7.5 = 25
        # 1 of 4 keywords with 2 occurrences: 17.5 + 15 = 32.5 -> 33
        files = [make_file("alpha.bin", path="/x/alpha.bin")]
        results = perform_basic_keyword_search(files, "alpha beta gamma delta")
        self.assertEqual(results[0].relevance_score, 33)

    def test_full_match_outranks_and_nonmatching_excluded(self):
        files = [
            make_file("notes.txt", path="/a/notes.txt"),
            make_file("tax_report_2023.pdf", path="/a/tax_report_2023.pdf"),
            make_file("report.doc", path="/a/report.doc"),
        ]
        results = perform_basic_keyword_search(files, "tax report")

        self.assertEqual([m.file["name"] for m in results], ["tax_report_2023.pdf", "report.doc"])
        self.assertGreater(results[0].relevance_score, results[1].relevance_score)

    def test_limit_and_ordering(self):
        files = [make_file(f"photo_{i}.jpg", path=f"/p/{'photo/' * (i % 3)}photo_{i}.jpg") for i in range(15)]
        results = perform_basic_keyword_search(files, "photo")

        self.assertEqual(len(results), 10)
        scores = [m.relevance_score for m in results]
        self.assertEqual(scores, sorted(scores, reverse=True))

    def test_ties_keep_input_order(self):
        files = [make_file("b_invoice.pdf", path="/b"), make_file("a_invoice.pdf", path="/a")]
        results = perform_basic_keyword_search(files, "invoice")
        self.assertEqual([m.file["name"] for m in results], ["b_invoice.pdf", "a_invoice.pdf"])

    def test_regex_characters_are_literal(self):
        results = perform_basic_keyword_search([make_file("c++notes.txt")], "c++")
        self.assertEqual(results[0].file["name"], "c++notes.txt")

    def test_extract_keywords(self):
        self.assertEqual(extract_keywords("  Find MY Tax   docs "), ["find", "tax", "docs"])


class TestSearchMatch(unittest.TestCase):
    def test_score_clamped(self):
        self.assertEqual(SearchMatch({}, 250, "r").relevance_score, 100)
        self.assertEqual(SearchMatch({}, -5, "r").relevance_score, 0)

    def test_to_dict(self):
        self.assertEqual(SearchMatch({"name": "a"}, 50, "why").to_dict(),
                         {"file": {"name": "a"}, "relevanceScore": 50, "reason": "why"})


class TestParseAISearchResponse(unittest.TestCase):
    def setUp(self):
        self.files = [make_file("invoice.pdf"), make_file("holiday.jpg"), make_file("budget_2024.xlsx")]

    def test_quoted_label(self):
        results = parse_ai_search_response('"invoice.pdf": 85', self.files)

        self.assertEqual(len(results), 1)
        self.assertIs(results[0].file, self.files[0])
        self.assertEqual(results[0].relevance_score, 85)

    def test_mixed_formats_sorted(self):
        text = "Results:\n'holiday.jpg' - 40\n\"invoice.pdf\": 90\n"
        results = parse_ai_search_response(text, self.files)

        self.assertEqual([(m.file["name"], m.relevance_score) for m in results],
                         [("invoice.pdf", 90), ("holiday.jpg", 40)])

    def test_unstructured_answer_returns_raw(self):
        text = "None of these files seem related to your description."
        result = parse_ai_search_response(text, self.files)

        self.assertEqual(result["rawAIResponse"], text)
        self.assertIn("note", result)

    def test_unresolved_labels_dropped(self):
        result = parse_ai_search_response('"zzzzzzzzzzzzzzzzzzzz": 70', self.files)
        self.assertIn("rawAIResponse", result)

    def test_fuzzy_label(self):
        results = parse_ai_search_response('"budget 2024 sheet": 60', self.files)
        self.assertEqual(results[0].file["name"], "budget_2024.xlsx")

    def test_unquoted_list_one_match_per_line(self):
        results = parse_ai_search_response("- invoice.pdf: 85\n- holiday.jpg: 10", self.files)

        self.assertEqual([(m.file["name"], m.relevance_score) for m in results],
                         [("invoice.pdf", 85), ("holiday.jpg", 10)])

    def test_long_unstructured_answer_is_fast(self):
        text = "The folder holds many unrelated notes about travel and cooking without any rating " * 250
        self.assertGreater(len(text), 20000)

        start = time.perf_counter()
        result = parse_ai_search_response(text, self.files)
        elapsed = time.perf_counter() - start

        self.assertEqual(result["rawAIResponse"], text)
        self.assertLess(elapsed, 2.0)


class TestFileNameMatching(unittest.TestCase):
    def test_substring_either_direction(self):
        files = [make_file("a.txt"), make_file("report.pdf"), make_file("report.pdf.bak")]
        self.assertEqual(find_best_file_name_match("REPORT", files)["name"], "report.pdf")
        self.assertEqual(find_best_file_name_match("the report.pdf file", files)["name"], "report.pdf")

    def test_threshold(self):
        files = [make_file("abc.txt")]
        self.assertIsNone(find_best_file_name_match("zzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzzz", files))
        self.assertIsNone(find_best_file_name_match("", files))

    def test_similarity_values(self):
        self.assertEqual(calculate_similarity("abc", "abc"), 1.0)
        self.assertEqual(calculate_similarity("ab", "abcd"), 0.5)
        self.assertEqual(calculate_similarity("", ""), 0.0)

    def test_similarity_is_symmetric(self):
        pairs = [("abcd", "dcbx"), ("report", "repo"), ("aab", "abb"), ("photo.jpg", "foto.jpeg")]
        for a, b in pairs:
            with self.subTest(a=a, b=b):
                self.assertEqual(calculate_similarity(a, b), calculate_similarity(b, a))

    def test_selected_file_independent_of_argument_order(self):
        files = [make_file("abcdefgh.txt"), make_file("qrstuvwx.txt")]
        label = "qrstuvwx.tx_"
        best = find_best_file_name_match(label, files)
        self.assertEqual(best["name"], "qrstuvwx.txt")


if __name__ == "__main__":
    unittest.main()
