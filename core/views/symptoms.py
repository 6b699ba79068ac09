from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.serializers.symptom import SymptomCheckSerializer
from core.services import symptoms as svc
from core.throttling import SymptomCheckThrottle


@api_view(['GET'])
@permission_classes([])
def symptom_list(request):
    return Response({'ok': True, 'data': svc.list_symptoms()})


@api_view(['GET'])
@permission_classes([])
def symptoms_by_category(request, category: str):
    return Response({'ok': True, 'data': svc.list_symptoms(category)})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@throttle_classes([SymptomCheckThrottle])
def symptom_check(request):
    s = SymptomCheckSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    chk = svc.assess(request.user, s.validated_data['symptoms'])
    return Response({'ok': True, 'data': svc.format_check(chk)}, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def symptom_history(request):
    return Response({'ok': True, 'data': svc.history(request.user)})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def symptom_check_detail(request, check_id: int):
    return Response({'ok': True, 'data': svc.format_check(svc.get_check(check_id, request.user))})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def symptom_seed(request):
    count = svc.seed_reference_symptoms(request.user)
    return Response({'ok': True, 'msg': 'Symptoms seeded successfully', 'count': count})
