"""
SRS 변환 웹 서비스
==================

세레모니 파일을 업로드해 검사하거나 네이티브 형식으로 변환하는 Flask 앱.
엔드포인트는 srs_routes.py의 Blueprint에 있다.

실행:
    $ flask --app app run
"""

import logging

from flask import Flask, jsonify

from kzg_srs import config

from srs_routes import srs_bp

logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = config.MAX_UPLOAD_BYTES

app.register_blueprint(srs_bp)


@app.route("/")
def index():
    return jsonify({
        "service": "kzg-srs",
        "endpoints": ["/srs/formats", "/srs/inspect", "/srs/convert"],
    })
