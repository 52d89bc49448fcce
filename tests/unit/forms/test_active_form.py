"""表单基类字段声明与属性读写测试."""

import pytest

from activeform.core.exceptions import InvalidArgumentError, UnknownAttributeError
from activeform.forms.base import ActiveForm, ColumnAttribute
from activeform.forms.columns import FormColumn


def _signature(form_class: type[ActiveForm]) -> list[tuple[str, object, object, bool]]:
    return [(column.name, column.type, column.default, column.nullable) for column in form_class.columns()]


@pytest.mark.unit
def test_base_registry_starts_empty() -> None:
    assert list(ActiveForm.columns()) == []


@pytest.mark.unit
def test_registry_is_memoized_per_class() -> None:
    class ContactForm(ActiveForm):
        pass

    assert ContactForm.columns() is ContactForm.columns()
    assert ContactForm.columns() is not ActiveForm.columns()


@pytest.mark.unit
def test_sibling_registries_are_isolated() -> None:
    class FirstForm(ActiveForm):
        pass

    class SecondForm(ActiveForm):
        pass

    FirstForm.column("email")

    assert FirstForm.column_names() == ["email"]
    assert SecondForm.column_names() == []
    assert ActiveForm.column_names() == []


@pytest.mark.unit
def test_subclass_starts_with_parent_columns() -> None:
    class ParentForm(ActiveForm):
        pass

    ParentForm.column("email", {"type": "string", "default": "x", "null": False})

    class ChildForm(ParentForm):
        pass

    assert _signature(ChildForm) == _signature(ParentForm)

    ChildForm.column("message", {"type": "text"})

    assert ChildForm.column_names() == ["email", "message"]
    assert ParentForm.column_names() == ["email"]


@pytest.mark.unit
def test_class_keyword_declares_columns() -> None:
    class FeedbackForm(ActiveForm, columns=["email", {"message": {"type": "text"}}]):
        pass

    assert FeedbackForm.columns() == [FormColumn("email"), FormColumn("message", type="text")]
    assert isinstance(FeedbackForm.__dict__["email"], ColumnAttribute)


@pytest.mark.unit
def test_unknown_option_leaves_registry_untouched() -> None:
    class ContactForm(ActiveForm):
        pass

    with pytest.raises(InvalidArgumentError):
        ContactForm.column("email", {"required": True})

    assert ContactForm.column_names() == []
    assert "email" not in ContactForm.__dict__


@pytest.mark.unit
def test_column_accepts_keyword_options() -> None:
    class ContactForm(ActiveForm):
        pass

    column = ContactForm.column("age", type="integer", null=False)

    assert column == FormColumn("age", type="integer", nullable=False)


@pytest.mark.unit
def test_default_nullability() -> None:
    class ContactForm(ActiveForm):
        pass

    ContactForm.column("email")
    ContactForm.column("name", {"null": False})

    assert ContactForm.columns_hash()["email"].nullable is True
    assert ContactForm.columns_hash()["name"].nullable is False


@pytest.mark.unit
def test_reserved_names_are_rejected() -> None:
    class ContactForm(ActiveForm):
        pass

    with pytest.raises(InvalidArgumentError) as exc_info:
        ContactForm.column("save")

    assert exc_info.value.message_key == "DANGEROUS_ATTRIBUTE"


@pytest.mark.unit
def test_human_attribute_name() -> None:
    class ContactForm(ActiveForm, columns=[{"email": {"human_name": "邮箱"}}, "email_address", "author_id"]):
        pass

    assert ContactForm.human_attribute_name("email") == "邮箱"
    assert ContactForm.human_attribute_name("email_address") == "Email address"
    assert ContactForm.human_attribute_name("author_id") == "Author"


@pytest.mark.unit
def test_instance_uses_defaults_and_casts_assignments() -> None:
    class ContactForm(ActiveForm, columns=[{"age": {"type": "integer"}}, {"topic": {"default": "general"}}]):
        pass

    form = ContactForm(age="42")

    assert form.age == 42
    assert form.topic == "general"
    assert form.attributes == {"age": 42, "topic": "general"}

    form.age = "7"
    assert form.read_attribute("age") == 7


@pytest.mark.unit
def test_unconvertible_value_is_kept_raw() -> None:
    class ContactForm(ActiveForm, columns=[{"age": {"type": "integer"}}]):
        pass

    assert ContactForm(age="abc").age == "abc"


@pytest.mark.unit
def test_unknown_attribute_assignment_raises() -> None:
    class ContactForm(ActiveForm, columns=["email"]):
        pass

    with pytest.raises(UnknownAttributeError) as exc_info:
        ContactForm(phone="123")

    assert exc_info.value.attribute == "phone"

    form = ContactForm()
    with pytest.raises(UnknownAttributeError):
        form.write_attribute("phone", "123")


@pytest.mark.unit
def test_redeclared_column_last_declaration_wins() -> None:
    class ContactForm(ActiveForm):
        pass

    ContactForm.column("topic", {"default": "a"})
    ContactForm.column("topic", {"default": "b"})

    assert ContactForm.column_names() == ["topic", "topic"]
    assert ContactForm().topic == "b"


@pytest.mark.unit
def test_sqlalchemy_columns_follow_registry() -> None:
    class ContactForm(ActiveForm, columns=["email", {"age": {"type": "integer", "null": False}}]):
        pass

    columns = ContactForm.sqlalchemy_columns()

    assert [column.name for column in columns] == ["email", "age"]
    assert columns[1].nullable is False


@pytest.mark.unit
def test_mutable_defaults_are_copied_per_instance() -> None:
    class TaggedForm(ActiveForm, columns=[{"tags": {"default": []}}]):
        pass

    first, second = TaggedForm(), TaggedForm()
    first.tags.append("x")

    assert second.tags == []
    assert TaggedForm.columns()[0].default == []


@pytest.mark.unit
def test_defaults_are_cast_like_assigned_values() -> None:
    class OrderForm(ActiveForm, columns=[{"quantity": {"type": "integer", "default": "5"}}]):
        pass

    assert OrderForm().quantity == 5
    assert OrderForm(quantity="5").quantity == 5


@pytest.mark.unit
@pytest.mark.parametrize("name", ["__init__", "__class__", "__dict__", "__custom__"])
def test_dunder_names_are_rejected(name: str) -> None:
    class ContactForm(ActiveForm):
        pass

    with pytest.raises(InvalidArgumentError):
        ContactForm.column(name)

    assert ContactForm.column_names() == []
    assert ContactForm().attributes == {}


@pytest.mark.unit
def test_subclass_members_are_not_overwritten_by_columns() -> None:
    class SubscribeForm(ActiveForm, columns=["email"]):
        def normalize(self) -> None:
            self.email = "x"

    with pytest.raises(InvalidArgumentError) as exc_info:
        SubscribeForm.column("normalize")

    assert exc_info.value.message_key == "DANGEROUS_ATTRIBUTE"
    assert callable(SubscribeForm.__dict__["normalize"])
    SubscribeForm.column("email", {"default": "a"})
    assert SubscribeForm().email == "a"
