"""
URL configuration for the KilledIt project.
"""
from django.contrib import admin
from django.urls import path
from django.conf import settings
from django.conf.urls.static import static
from ninja import NinjaAPI

from apps.core.errors import KilledItError

api = NinjaAPI(
    title="KilledIt API",
    version="1.0.0",
    description="Obituaries for failed startups",
    docs_url="/docs",
)


@api.exception_handler(KilledItError)
def handle_killedit_error(request, exc: KilledItError):
    return api.create_response(request, {"error": exc.message}, status=exc.status_code)


from apps.identity.api import router as identity_router
from apps.obituaries.api import router as obituaries_router
from apps.media.api import router as media_router

api.add_router("/identity/", identity_router)
api.add_router("/obituaries/", obituaries_router)
api.add_router("/media/", media_router)

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', api.urls),
]

# Serve media files in development
if settings.DEBUG:
    urlpatterns += static(
        getattr(settings, 'MEDIA_URL', '/media/'),
        document_root=getattr(settings, 'MEDIA_ROOT', settings.BASE_DIR / 'media')
    )
