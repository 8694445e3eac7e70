import pytest

from apps.catalog.services.variant_keys import (
    OptionPair,
    canonical_key,
    pairs_from_selection,
    parse_key,
)


class TestCanonicalKey:

    def test_pairs_are_sorted_by_axis_name(self):
        assert canonical_key([('Size', 'M'), ('Color', 'Red')]) == 'Color:Red|Size:M'

    def test_order_independent(self):
        assert canonical_key([('B', '1'), ('A', 'x')]) == canonical_key([('A', 'x'), ('B', '1')])

    def test_sort_uses_code_points_not_locale(self):
        # 'Z' (0x5A) sorts before 'a' (0x61) and before accented letters
        key = canonical_key([('ébano', '1'), ('alpha', '2'), ('Zeta', '3')])
        assert key == 'Zeta:3|alpha:2|ébano:1'

    def test_values_do_not_affect_order(self):
        assert canonical_key([('A', 'z'), ('B', 'a')]) == 'A:z|B:a'

    def test_empty_assignment(self):
        assert canonical_key([]) == ''

    def test_accepts_option_pairs(self):
        pairs = [OptionPair('Size', 'S'), OptionPair('Color', 'Blue')]
        assert canonical_key(pairs) == 'Color:Blue|Size:S'


class TestSelectionPairs:

    def test_mapping_to_pairs(self):
        pairs = pairs_from_selection({'Color': 'Red', 'Size': 'M'})
        assert pairs == [OptionPair('Color', 'Red'), OptionPair('Size', 'M')]

    def test_none_is_a_programming_error(self):
        with pytest.raises(TypeError):
            pairs_from_selection(None)


class TestParseKey:

    def test_parse_generated_key(self):
        assert parse_key('Color:Red|Size:M') == [
            OptionPair('Color', 'Red'),
            OptionPair('Size', 'M'),
        ]

    def test_value_may_contain_colon(self):
        assert parse_key('Ratio:16:9') == [OptionPair('Ratio', '16:9')]

    def test_empty_key(self):
        assert parse_key('') == []

    def test_malformed_segment(self):
        with pytest.raises(ValueError):
            parse_key('Color:Red|Size')
