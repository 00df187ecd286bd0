class InvalidOption(ValueError):
    """Raised when a model's slug options cannot produce a slug."""

    @classmethod
    def missing_from_field(cls) -> "InvalidOption":
        return MissingSourceFields(
            "Could not determine which fields should be sluggified"
        )

    @classmethod
    def missing_slug_field(cls) -> "InvalidOption":
        return MissingSlugField(
            "Could not determine in which field the slug should be saved"
        )

    @classmethod
    def invalid_maximum_length(cls) -> "InvalidOption":
        return InvalidMaximumLength("Maximum length should be greater than zero")


class MissingSourceFields(InvalidOption):
    pass


class MissingSlugField(InvalidOption):
    pass


class InvalidMaximumLength(InvalidOption):
    pass
