import pytest
from rest_framework.test import APIClient

from grading.validators import GradingScale


def band(grade, remark, lo, hi):
    return GradingScale(grade=grade, remark=remark, from_=lo, to=hi)


@pytest.fixture
def jhs_scales():
    return [
        band("A1", "Excellent", 80, 100),
        band("B2", "Very Good", 70, 79),
        band("C4", "Good", 50, 69),
    ]


@pytest.fixture
def registrar(django_user_model):
    return django_user_model.objects.create_user(username="registrar", password="pw", role="REGISTRAR")


@pytest.fixture
def teacher(django_user_model):
    return django_user_model.objects.create_user(username="teacher", password="pw", role="TEACHER")


@pytest.fixture
def registrar_client(registrar):
    client = APIClient()
    client.force_authenticate(user=registrar)
    return client


@pytest.fixture
def teacher_client(teacher):
    client = APIClient()
    client.force_authenticate(user=teacher)
    return client
