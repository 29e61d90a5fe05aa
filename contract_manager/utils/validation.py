"""Description validation shared by every registry write"""

from contract_manager.exceptions import DescriptionTooLong, EmptyDescription, InvalidDescription


MAX_DESCRIPTION_LENGTH = 256

# Width of the description column; configured limits may not exceed it
MAX_STORED_DESCRIPTION_LENGTH = 1024


def validate_description(description: str, max_length: int = MAX_DESCRIPTION_LENGTH) -> str:
    """
    Validate a contract description

    Length is measured in UTF-8 bytes.

    Args:
        description: Description text
        max_length: Maximum allowed length in bytes

    Returns:
        The description, unchanged

    Raises:
        TypeError: If description is not a string
        InvalidDescription: If description is not encodable as UTF-8
        EmptyDescription: If description is empty
        DescriptionTooLong: If description is longer than max_length bytes
    """
    if not isinstance(description, str):
        raise TypeError(f"Description must be a string, got {type(description).__name__}")

    try:
        length = len(description.encode("utf-8"))
    except UnicodeEncodeError as e:
        raise InvalidDescription(e.reason) from e

    if length == 0:
        raise EmptyDescription()
    if length > max_length:
        raise DescriptionTooLong(length, max_length)
    return description
