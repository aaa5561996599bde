"""URL configuration for files app."""

from django.urls import path

from file_manager.apps.files.views import FileManagerView

app_name = 'files'

urlpatterns = [
    path('', FileManagerView.as_view(), name='index'),
]
