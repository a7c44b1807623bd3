import csv
from io import StringIO

from rest_framework.renderers import BaseRenderer


class CSVRenderer(BaseRenderer):
    media_type = 'text/csv'
    format = 'csv'
    charset = 'utf-8'

    def render(self, data, accepted_media_type=None, renderer_context=None):
        """
        Renders the revenue summary as CSV. Other payloads (e.g. error
        responses) are written as key/value rows.
        """
        if not data:
            return ''

        string_buffer = StringIO()
        writer = csv.writer(string_buffer)

        if isinstance(data, dict) and 'by_type' in data:
            self.render_revenue_summary(writer, data)
        elif isinstance(data, dict):
            for key, value in data.items():
                writer.writerow([key, value])
        else:
            for row in data:
                writer.writerow(row.values() if isinstance(row, dict) else [row])

        return string_buffer.getvalue()

    def render_revenue_summary(self, writer, data):
        writer.writerow(['Revenue Summary', f"last {data.get('days')} days"])
        writer.writerow([])

        writer.writerow(['Tournament Type', 'Tournaments', 'Platform Earnings', 'Organizer Earnings', 'Fees Collected'])
        for item in data.get('by_type', []):
            writer.writerow([
                item.get('tournament_type'),
                item.get('tournament_count'),
                item.get('platform_earnings'),
                item.get('organizer_earnings'),
                item.get('total_fees_collected'),
            ])
        totals = data.get('totals', {})
        writer.writerow([
            'Total',
            totals.get('tournament_count'),
            totals.get('platform_earnings'),
            totals.get('organizer_earnings'),
            totals.get('total_fees_collected'),
        ])
        writer.writerow([])

        writer.writerow(['Pending Deposits', data.get('pending_deposits')])
        writer.writerow(['Pending Withdrawals', data.get('pending_withdrawals')])
