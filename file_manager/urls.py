"""Main URL mapping configuration file.

Include other URLConfs from external apps using method `include()`.

It is also a good practice to keep a single URL to the root index page.

See: https://docs.djangoproject.com/en/stable/topics/http/urls/
"""

from django.conf import settings
from django.conf.urls.static import static
from django.urls import include, path

urlpatterns = [
    path('', include('file_manager.apps.files.urls')),
]

if settings.DEBUG:  # pragma: no cover
    # Icons are served by the frontend web server in production
    urlpatterns += static(
        settings.FILE_MANAGER_ICONS_URL,
        document_root=settings.FILE_MANAGER_ICONS_DIR,
    )
