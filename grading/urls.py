from rest_framework.routers import DefaultRouter
from .views import CommentOptionViewSet, GradingSettingsViewSet, GradeBandViewSet

router = DefaultRouter()
router.register(r"grading/settings", GradingSettingsViewSet, basename="grading-settings")
router.register(r"grading/bands", GradeBandViewSet, basename="grading-bands")
router.register(r"grading/comment-options", CommentOptionViewSet, basename="grading-comment-options")
urlpatterns = router.urls
