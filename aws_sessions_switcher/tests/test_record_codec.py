"""Tests for the record codec."""

import pytest

from ..services import record_codec
from ..services.errors import MalformedStoreError


class TestDecode:
    """Test cases for record_codec.decode."""

    @pytest.mark.parametrize('text', [None, '', '\n\n', '   '])
    def test_empty_input_yields_empty_mapping(self, text):
        assert record_codec.decode(text) == {}

    def test_decode_sections(self):
        text = (
            "[acme-prod]\n"
            "project_name = acme\n"
            "role_arn = arn:aws:iam::123:role/X\n"
            "\n"
            "[session-acme-prod]\n"
            "aws_session_token=FwoGZXIvYXdzEJr//token+==\n"
        )
        assert record_codec.decode(text) == {
            'acme-prod': {'project_name': 'acme', 'role_arn': 'arn:aws:iam::123:role/X'},
            'session-acme-prod': {'aws_session_token': 'FwoGZXIvYXdzEJr//token+=='},
        }

    def test_whitespace_around_equals_is_ignored(self):
        text = "[a]\nkey=value\nother   =   spaced value\n"
        assert record_codec.decode(text) == {'a': {'key': 'value', 'other': 'spaced value'}}

    def test_values_are_raw_strings(self):
        text = '[a]\nlist = one, two\nquoted = "x"\n'
        sections = record_codec.decode(text)
        assert sections['a']['list'] == 'one, two'
        assert sections['a']['quoted'] == '"x"'

    def test_key_before_section_is_an_error(self):
        with pytest.raises(MalformedStoreError, match="before any"):
            record_codec.decode("orphan = 1\n[a]\nkey = value\n")

    def test_duplicate_key_is_an_error(self):
        with pytest.raises(MalformedStoreError):
            record_codec.decode("[a]\nkey = 1\nkey = 2\n")

    def test_nested_section_is_an_error(self):
        with pytest.raises(MalformedStoreError, match="Nested"):
            record_codec.decode("[a]\nkey = 1\n[[b]]\nother = 2\n")


class TestEncode:
    """Test cases for record_codec.encode."""

    def test_encode_empty(self):
        assert record_codec.encode({}) == ''

    def test_encode_layout(self):
        text = record_codec.encode({'a': {'k': 'v'}, 'b': {'x': 'y', 'z': ''}})
        assert text == "[a]\nk = v\n\n[b]\nx = y\nz = \n"

    def test_encode_keeps_mapping_order(self):
        text = record_codec.encode({'zeta': {'k': '1'}, 'alpha': {'k': '2'}})
        assert text.index('[zeta]') < text.index('[alpha]')

    def test_newline_in_value_is_rejected(self):
        with pytest.raises(ValueError, match="newline"):
            record_codec.encode({'a': {'k': 'line1\nline2'}})

    def test_round_trip(self):
        sections = {
            'acme-prod': {
                'project_name': 'acme',
                'project_environment': 'prod',
                'role_arn': 'arn:aws:iam::123:role/X',
                'mfa_required': 'True',
                'mfa_device_arn': '',
            },
            'session-acme-prod': {
                'aws_access_key_id': 'ASIAEXAMPLE',
                'aws_secret_access_key': 'wJalrXUtnFEMI/K7MDENG/bPxRfiCYEXAMPLEKEY',
                'aws_session_token': 'IQoJb3JpZ2luX2VjE//token+with=signs==',
                'expiration': '2030-01-01 10:00:00',
            },
            'weird name with spaces': {'note': 'a, b; c: d'},
        }
        assert record_codec.decode(record_codec.encode(sections)) == sections

    @pytest.mark.parametrize('sections', [
        {'[x': {'k': 'v'}},
        {'x]': {'k': 'v'}},
        {'a': {'k': '"""x'}},
        {'a': {'k': "'''x"}},
    ])
    def test_unreadable_output_is_rejected(self, sections):
        with pytest.raises(ValueError):
            record_codec.encode(sections)

    def test_surrounding_whitespace_is_rejected(self):
        with pytest.raises(ValueError, match=r"\[a\]"):
            record_codec.encode({'a': {'k': ' padded '}})
