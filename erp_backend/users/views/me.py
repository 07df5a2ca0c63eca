# users/views/me.py

from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from core.api.responses import envelope
from users.serializers import UserSerializer


class MeView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = UserSerializer

    @extend_schema(
        tags=["auth"],
        responses={200: UserSerializer},
        description="Get current authenticated user profile and capabilities",
    )
    def get(self, request):
        return envelope(UserSerializer(request.user).data)
