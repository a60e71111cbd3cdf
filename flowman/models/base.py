"""
ValidatedModel — models that carry their own validation outcome.

A record can be invalid after a save attempt. Instead of raising, the
outcome is kept on the instance:

    position.save_validated()
    if not position.is_valid:
        print(position.errors)
"""

from django.core.exceptions import NON_FIELD_ERRORS, ValidationError
from django.db import models


def error_messages(error: ValidationError) -> list[str]:
    """Flatten a ValidationError into readable messages, prefixing field names."""
    if not hasattr(error, 'error_dict'):
        return list(error.messages)

    messages = []
    for field, field_messages in error.message_dict.items():
        for message in field_messages:
            if field == NON_FIELD_ERRORS:
                messages.append(message)
            else:
                messages.append(f"{field}: {message}")
    return messages


class ValidatedModel(models.Model):
    """
    Abstract base with a transient error list and validity flag.

    Nothing here is persisted; the state lives on the instance for the
    duration of a build.
    """

    class Meta:
        abstract = True

    @property
    def errors(self) -> list[str]:
        """Messages collected by validate() and add_error()."""
        return self.__dict__.setdefault('_flow_errors', [])

    @property
    def is_valid(self) -> bool:
        return not self.__dict__.get('_flow_invalid', False)

    def set_not_valid(self) -> None:
        self._flow_invalid = True

    def add_error(self, message) -> None:
        """Add a record-level error and mark the record invalid."""
        self.errors.append(str(message))
        self.set_not_valid()

    def validate(self, exclude=None) -> bool:
        """Run full_clean(), collecting messages instead of raising."""
        try:
            self.full_clean(exclude=exclude)
        except ValidationError as e:
            for message in error_messages(e):
                self.add_error(message)
        return self.is_valid

    def save_validated(self, *args, **kwargs):
        """
        Validate, then save only if valid.

        Returns:
            self, with is_valid/errors reflecting the outcome
        """
        if self.validate():
            self.save(*args, **kwargs)
        return self
