"""Forms for the file manager page."""

from types import MappingProxyType
from typing import Any, Final, final

from django import forms

from file_manager.apps.files.logic.listing import (
    ORDER_ASC,
    ORDER_DESC,
    SORT_KEYS,
    SORT_MTIME,
    SORT_NAME,
    SORT_ORDERS,
    SORT_SIZE,
    SORT_TYPE,
)

SORT_CHOICES: Final = (
    (SORT_NAME, 'Name'),
    (SORT_SIZE, 'Size'),
    (SORT_TYPE, 'Type'),
    (SORT_MTIME, 'Date of last modify'),
)

ORDER_CHOICES: Final = (
    (ORDER_ASC, 'Ascending'),
    (ORDER_DESC, 'Descending'),
)

_QUERY_DEFAULTS: Final = MappingProxyType({
    'path': '',
    'q': '',
    'sort': SORT_NAME,
    'order': ORDER_ASC,
})


@final
class ListingQueryForm(forms.Form):
    """Search and sort parameters of a listing request.

    Unknown sort keys and orders fall back to the defaults instead of
    failing validation, so a stale bookmark still shows the folder.
    """

    path = forms.CharField(required=False, strip=False)
    q = forms.CharField(required=False)
    sort = forms.CharField(required=False)
    order = forms.CharField(required=False)

    def clean_path(self) -> str:
        """Drop leading slashes, paths are always relative to the root."""
        return self.cleaned_data['path'].lstrip('/')

    def clean_sort(self) -> str:
        """Fall back to sorting by name."""
        sort = self.cleaned_data['sort']
        return sort if sort in SORT_KEYS else SORT_NAME

    def clean_order(self) -> str:
        """Fall back to ascending order."""
        order = self.cleaned_data['order']
        return order if order in SORT_ORDERS else ORDER_ASC

    @property
    def has_valid_path(self) -> bool:
        """Whether the requested path survived validation."""
        return not self.has_error('path')

    @property
    def query(self) -> dict[str, Any]:
        """Cleaned parameters, invalid fields replaced by their defaults.

        Fields are judged one by one, so a bad search text never resets
        the path. Check has_valid_path before trusting the path.
        """
        self.is_valid()
        return {**_QUERY_DEFAULTS, **self.cleaned_data}
