from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.response import Response

from core.permissions import ReadOnlyOrProfessionalOrAdmin
from core.serializers.webinar import AttendanceSerializer, WebinarCreateSerializer, WebinarUpdateSerializer
from core.services import webinars as svc
from core.services.scheduling import TimeWindow


@api_view(['GET', 'POST'])
@permission_classes([ReadOnlyOrProfessionalOrAdmin])
def webinars(request):
    if request.method == 'GET':
        return Response({'ok': True, 'data': svc.format_many(svc.upcoming())})

    s = WebinarCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    w = svc.create_webinar(
        request.user,
        title=vd['title'],
        description=vd['description'],
        window=TimeWindow.of(vd['date'], vd['duration']),
        capacity=vd['capacity'],
        tags=vd.get('tags'),
    )
    return Response({'ok': True, 'data': svc.format_webinar(svc.get_webinar(w.id))}, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([])
def webinars_all(request):
    return Response({'ok': True, 'data': svc.format_many(svc.all_webinars())})


@api_view(['GET'])
@permission_classes([])
def webinars_recorded(request):
    return Response({'ok': True, 'data': svc.format_many(svc.recorded())})


@api_view(['GET'])
@permission_classes([])
def webinars_by_tag(request, tag: str):
    return Response({'ok': True, 'data': svc.format_many(svc.with_tag(tag))})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def webinars_registered(request):
    return Response({'ok': True, 'data': svc.format_many(svc.registered_for(request.user))})


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticatedOrReadOnly])
def webinar_detail(request, webinar_id: int):
    w = svc.get_webinar(webinar_id)
    if request.method == 'GET':
        return Response({'ok': True, 'data': svc.format_webinar(w)})

    if request.method == 'DELETE':
        svc.delete_webinar(w, request.user)
        return Response({'ok': True, 'msg': 'Webinar removed'})

    s = WebinarUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    w = svc.update_webinar(w, request.user, **s.to_service_kwargs())
    return Response({'ok': True, 'data': svc.format_webinar(w)})


@api_view(['POST', 'DELETE'])
@permission_classes([IsAuthenticated])
def webinar_register(request, webinar_id: int):
    w = svc.get_webinar(webinar_id)
    if request.method == 'DELETE':
        svc.cancel_webinar_registration(w, request.user)
        msg = 'Registration cancelled'
    else:
        svc.register_for_webinar(w, request.user)
        msg = 'Registered for webinar'
    return Response({'ok': True, 'msg': msg, 'data': svc.format_webinar(svc.get_webinar(webinar_id))})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def webinar_attendance(request, webinar_id: int):
    w = svc.get_webinar(webinar_id)
    s = AttendanceSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    svc.mark_attendance(w, request.user, s.validated_data['userId'], s.validated_data['attended'])
    return Response({'ok': True, 'data': svc.format_webinar(svc.get_webinar(webinar_id))})
