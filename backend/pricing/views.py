import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from .serializers import QuoteTotalsInputSerializer
from .totals import section_from_data, compute_section_totals, compute_quote_totals

logger = logging.getLogger('backend.pricing')


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def quote_totals_preview(request):
    """Section and quote totals for posted sections, without saving anything"""
    serializer = QuoteTotalsInputSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    sections_data = serializer.validated_data['sections']
    records = [section_from_data(section_data) for section_data in sections_data]
    section_totals = [
        {'name': section_data.get('name', ''), **compute_section_totals(record).as_dict()}
        for section_data, record in zip(sections_data, records)
    ]
    totals = compute_quote_totals(records)
    logger.debug(f"Totals preview for {len(records)} section(s): {totals.total_cents} cents")
    return Response({
        'sections': section_totals,
        **totals.as_dict(),
    })
