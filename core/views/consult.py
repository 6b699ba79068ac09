from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.permissions import IsProfessionalRole
from core.serializers.consult import ConsultBookSerializer, ConsultUpdateSerializer
from core.services.consult import (
    book_consultation,
    delete_consultation,
    ensure_consult_access,
    format_consultation,
    get_consultation,
    list_for_professional,
    list_for_requester,
    list_professionals,
    update_consultation,
)
from core.services.scheduling import TimeWindow


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def consultations(request):
    if request.method == 'GET':
        return Response({'ok': True, 'data': list_for_requester(request.user)})

    s = ConsultBookSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    window = TimeWindow.of(vd['date'], vd['duration'])
    c = book_consultation(
        request.user,
        vd['professional'],
        window,
        vd['topic'],
        notes=vd.get('notes', ''),
        concerns=vd.get('concerns', ''),
    )
    return Response({'ok': True, 'data': format_consultation(get_consultation(c.id))}, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsProfessionalRole])
def professional_consultations(request):
    return Response({'ok': True, 'data': list_for_professional(request.user)})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def professionals_list(request):
    return Response({'ok': True, 'data': list_professionals()})


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def consultation_detail(request, consult_id: int):
    c = get_consultation(consult_id)
    if request.method == 'GET':
        ensure_consult_access(request.user, c)
        return Response({'ok': True, 'data': format_consultation(c)})

    if request.method == 'DELETE':
        delete_consultation(c, request.user)
        return Response({'ok': True, 'msg': 'Consultation removed'})

    s = ConsultUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    c = update_consultation(c, request.user, **s.validated_data)
    return Response({'ok': True, 'data': format_consultation(c)})
