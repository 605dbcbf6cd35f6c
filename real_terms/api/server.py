"""Flask API serving merged dashboard data and transformed chart rows."""

from __future__ import annotations

import asyncio
import logging

from flask import Flask, jsonify, request

from real_terms.config import CHART_ASSETS, DENOMINATORS, TIME_RANGES, Settings
from real_terms.data.pipeline import load_dashboard_data
from real_terms.indicators.denominators import (
    filter_time_range,
    period_description,
    performance_summary,
    transform_rows,
)


logger = logging.getLogger(__name__)

app = Flask(__name__)


def _get_settings() -> Settings:
    # Tests inject settings (and fake fetchers) through app.config
    return app.config.get('SETTINGS') or Settings()


def _load_payload() -> dict:
    return asyncio.run(
        load_dashboard_data(
            _get_settings(),
            market=app.config.get('MARKET_FETCHER'),
            macro=app.config.get('MACRO_FETCHER'),
        )
    )


def _parse_bool(raw: str | None, default: bool) -> bool:
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in ('1', 'true', 'yes', 'on'):
        return True
    if value in ('0', 'false', 'no', 'off'):
        return False
    raise ValueError(f'invalid boolean: {raw}')


@app.get('/api/data')
def get_data():
    payload = _load_payload()
    status = 200 if payload.get('success') else 500
    return jsonify(payload), status


@app.get('/api/chart')
def get_chart():
    denominator = (request.args.get('denominator') or 'GOLD').upper()
    time_range = request.args.get('range') or '5Y'
    if denominator not in DENOMINATORS:
        return jsonify({'success': False, 'error': f'denominator must be one of {list(DENOMINATORS)}'}), 400
    if time_range.lower() != 'all' and time_range.upper() not in TIME_RANGES:
        return jsonify({'success': False, 'error': f'range must be one of {list(TIME_RANGES)} or all'}), 400
    try:
        indexed = _parse_bool(request.args.get('indexed'), True)
    except ValueError as e:
        return jsonify({'success': False, 'error': str(e)}), 400

    payload = _load_payload()
    if not payload.get('success'):
        return jsonify(payload), 500

    try:
        window = filter_time_range(payload['data'], time_range)
        chart = transform_rows(window, denominator, indexed)
    except Exception as e:
        logger.exception('Chart transform failed')
        return jsonify({'success': False, 'error': str(e)}), 500

    body = dict(payload)
    body.update({
        'denominator': denominator,
        'range': time_range,
        'indexed': indexed,
        'chart': chart,
        'performance': performance_summary(chart, CHART_ASSETS),
        'period': period_description(window),
    })
    return jsonify(body)


if __name__ == '__main__':
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    app.run(host='0.0.0.0', port=8000, debug=False)
