"""Tests for short code generation."""

import pytest

from shortener.services.code_generator import (
    BASE62_CHARS,
    DEFAULT_CODE_LENGTH,
    code_space_size,
    generate_code,
)


class TestGenerateCode:
    """Test random code generation."""

    def test_alphabet_is_base62(self):
        assert len(BASE62_CHARS) == 62
        assert len(set(BASE62_CHARS)) == 62
        assert BASE62_CHARS.isalnum()

    def test_default_length(self):
        assert DEFAULT_CODE_LENGTH == 6
        assert len(generate_code()) == 6

    def test_custom_length(self):
        assert len(generate_code(10)) == 10
        assert len(generate_code(1)) == 1

    def test_only_alphabet_characters(self):
        for _ in range(200):
            code = generate_code()
            assert all(c in BASE62_CHARS for c in code), code

    def test_codes_vary(self):
        # 62^6 possibilities: 1000 draws colliding would mean a broken source
        codes = {generate_code() for _ in range(1000)}
        assert len(codes) == 1000

    @pytest.mark.parametrize("length", [0, -3])
    def test_rejects_non_positive_length(self, length):
        with pytest.raises(ValueError):
            generate_code(length)

    def test_code_space_size(self):
        assert code_space_size() == 56_800_235_584
        assert code_space_size(1) == 62
