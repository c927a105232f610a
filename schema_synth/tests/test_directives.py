import pytest

from schema_synth.scanner.annotations import parse_doc
from schema_synth.scanner.directives import apply_field_directives, apply_reference_directives, set_required
from schema_synth.schema import Schema


def _apply(doc, items=None):
    owner = Schema(type="object")
    prop = Schema(type="array", items=items) if items is not None else Schema(type="string")
    apply_field_directives(parse_doc(doc, with_title=False).directives, owner, "field", prop, items)
    return owner, prop


class TestFieldDirectives:
    """Test applying parsed directives to a property"""

    def test_required_goes_to_owner(self):
        owner, prop = _apply("required: true")
        assert owner.required == ["field"]
        assert "required" not in prop.to_dict()

    def test_items_directives_need_items(self):
        _, prop = _apply("itemsMaxLength: 4\nmaxLength: 9")
        assert prop.to_dict() == {"type": "string", "maxLength": 9}

    def test_items_directives_on_items(self):
        items = Schema(type="string")
        _, prop = _apply("itemsMaxLength: 4\nitems.pattern: ^x\nitemsUnique: false", items)
        assert prop.items.to_dict() == {"type": "string", "maxLength": 4, "pattern": "^x"}

    def test_read_only(self):
        _, prop = _apply("readOnly: true\nread-only: false")
        assert prop.read_only is False

    def test_reference_accepts_required_only(self):
        owner = Schema(type="object")
        apply_reference_directives(parse_doc("required\nmaxLength: 3").directives, owner, "ref")
        assert owner.required == ["ref"]

    def test_set_required_toggles(self):
        owner = Schema()
        set_required(owner, "a", True)
        set_required(owner, "a", True)
        assert owner.required == ["a"]
        set_required(owner, "a", False)
        assert owner.required == []


if __name__ == "__main__":
    pytest.main([__file__])
