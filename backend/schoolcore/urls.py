from django.urls import path

from .views.import_views import (
    import_cancel,
    import_commit,
    import_history,
    import_modules,
    import_preview,
    import_template,
    import_upload,
    import_validate,
)

app_name = "schoolcore"

urlpatterns = [
    path("imports/modules/", import_modules, name="import_modules"),
    path("imports/history/", import_history, name="import_history"),
    path("imports/<str:entity>/upload/", import_upload, name="import_upload"),
    path("imports/<str:entity>/template/", import_template, name="import_template"),
    path("imports/<str:entity>/<str:batch_id>/validate/", import_validate, name="import_validate"),
    path("imports/<str:entity>/<str:batch_id>/preview/", import_preview, name="import_preview"),
    path("imports/<str:entity>/<str:batch_id>/commit/", import_commit, name="import_commit"),
    path("imports/<str:entity>/<str:batch_id>/cancel/", import_cancel, name="import_cancel"),
]
