#!/usr/bin/env python3
"""
Read-only JSON API for the media tracker dashboard.
The data files are re-read on every request so a finished update run shows up
without restarting the server.
"""

import logging
import os
from dataclasses import asdict
from datetime import datetime

from dotenv import load_dotenv
from flask import Flask, jsonify

from cors_config import configure_cors
from mediatracker.analytics.breakdowns import cumulative_series, outlet_breakdown, topic_breakdown
from mediatracker.analytics.stats import dashboard_stats
from mediatracker.analytics.tour import district_markers, tour_progress
from mediatracker.storage.appearances_store import AppearanceStore, CollectionFormatError, load_tour

# Load environment variables from .env file
load_dotenv()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["APPEARANCES_PATH"] = os.environ.get("APPEARANCES_PATH", "data/appearances.json")
app.config["TOUR_PATH"] = os.environ.get("TOUR_PATH", "data/schoolTour.json")
app = configure_cors(app)


def _load_collection():
    return AppearanceStore(app.config["APPEARANCES_PATH"]).load()


@app.errorhandler(CollectionFormatError)
def handle_bad_data(e):
    logger.error(f"Data file error: {e}")
    return jsonify({"success": False, "error": "Data file is invalid"}), 500


@app.route('/api/health')
def health_check():
    """API health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'timestamp': datetime.now().isoformat(),
        'version': '1.0.0'
    })


@app.route('/api/appearances')
def get_appearances():
    collection = _load_collection()
    data = [a.to_dict() for a in collection.appearances]
    return jsonify({
        "success": True,
        "data": data,
        "count": len(data),
        "lastUpdated": collection.last_updated,
    })


@app.route('/api/summary')
def get_summary():
    """Headline stats plus the chart series."""
    collection = _load_collection()
    appearances = collection.appearances
    return jsonify({
        "success": True,
        "stats": asdict(dashboard_stats(collection)),
        "outlets": [asdict(e) for e in outlet_breakdown(appearances)],
        "topics": [asdict(e) for e in topic_breakdown(appearances)],
        "cumulative": [asdict(p) for p in cumulative_series(appearances)],
        "officeStartDate": collection.office_start_date,
        "appointmentDate": collection.appointment_date,
    })


@app.route('/api/tour')
def get_tour():
    path = app.config.get("TOUR_PATH")
    if not path or not os.path.exists(path):
        return jsonify({"success": False, "error": "No tour data"}), 404
    tour = load_tour(path)
    return jsonify({
        "success": True,
        "progress": asdict(tour_progress(tour)),
        "markers": [asdict(m) for m in district_markers(tour)],
    })


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5002))
    debug = os.environ.get('FLASK_ENV') == 'development'

    logger.info(f"Starting media tracker dashboard API on port {port}")
    app.run(host='0.0.0.0', port=port, debug=debug)
