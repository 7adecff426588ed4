# grading/views.py
import logging
from decimal import Decimal, InvalidOperation

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.exceptions import ValidationError
from django_filters.rest_framework import DjangoFilterBackend

from .exceptions import GradingScaleError
from .models import CommentOption, GradingSettings, GradeBand
from .permissions import IsRegistrarOrAdmin
from .serializers import (
    GradingSettingsSerializer, GradeBandSerializer, CommentOptionSerializer,
    ScaleSetValidateSerializer, DepartmentScalesUpsertSerializer, GradingSettingsSaveSerializer,
)
from .services import lookup_grade

logger = logging.getLogger(__name__)


class GradingSettingsViewSet(viewsets.ModelViewSet):
    queryset = GradingSettings.objects.all()
    serializer_class = GradingSettingsSerializer
    permission_classes = [IsRegistrarOrAdmin]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["academic_year", "term", "is_active"]

    @action(detail=False, methods=["post"], url_path="save")
    def save_all(self, request):
        """Réglages + bandes de tous les départements + options de commentaires, tout ou rien."""
        ser = GradingSettingsSaveSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        try:
            settings_obj = ser.save()
        except GradingScaleError as e:
            raise ValidationError(e.errors)
        return Response(GradingSettingsSerializer(settings_obj).data, status=status.HTTP_201_CREATED)


class GradeBandViewSet(viewsets.ModelViewSet):
    queryset = GradeBand.objects.select_related("settings")
    serializer_class = GradeBandSerializer
    permission_classes = [IsRegistrarOrAdmin]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["settings", "department"]

    # lecture seule: tout utilisateur connecté peut vérifier un barème
    @action(detail=False, methods=["post"], url_path="validate", permission_classes=[IsAuthenticated])
    def validate_scales(self, request):
        """Vérifie un jeu de bandes sans rien enregistrer (toujours 200)."""
        ser = ScaleSetValidateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        result = ser.to_result()
        if not result["valid"]:
            logger.info("Grading scale check failed with %d error(s)", len(result["errors"]))
        return Response(result, status=status.HTTP_200_OK)

    @action(detail=False, methods=["post"], url_path="bulk")
    def bulk(self, request):
        """Remplace les bandes d'un département (bloqué si au moins une erreur)."""
        ser = DepartmentScalesUpsertSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        result = ser.save()
        return Response({
            "settings": result["settings"],
            "department": result["department"],
            "department_name": result["department_name"],
            "bands": GradeBandSerializer(result["bands"], many=True).data,
        }, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["get"], url_path="lookup")
    def lookup(self, request):
        """GET ?settings=<id>&department=JHS&score=72.5 -> grade + remark."""
        settings_id = request.query_params.get("settings")
        department = request.query_params.get("department")
        score = request.query_params.get("score")
        if not (settings_id and department and score):
            raise ValidationError("settings, department and score are required.")
        try:
            value = Decimal(score)
        except InvalidOperation:
            raise ValidationError("score must be a number.")
        if not value.is_finite():
            raise ValidationError("score must be a number.")
        try:
            settings_obj = GradingSettings.objects.get(id=settings_id)
        except (GradingSettings.DoesNotExist, ValueError):
            raise ValidationError("Grading settings not found.")
        grade, remark = lookup_grade(settings_obj, department, value)
        return Response({"score": score, "grade": grade, "remark": remark})


class CommentOptionViewSet(viewsets.ModelViewSet):
    queryset = CommentOption.objects.all()
    serializer_class = CommentOptionSerializer
    permission_classes = [IsRegistrarOrAdmin]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["option_type", "is_active"]
