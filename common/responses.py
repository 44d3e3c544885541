from django.http import JsonResponse
from rest_framework.response import Response


def nullable(data):
    # DRF 는 None 을 빈 본문으로 렌더링하므로 JSON null 을 명시적으로 돌려준다
    if data is None:
        return JsonResponse(None, safe=False)
    return Response(data)
