#!/usr/bin/env python3
"""
Local web surface (Flask) for the clipboard speed reader.

- GET  /                  page with the word frame, metadata panel and shortcuts
- GET  /api/state         current view model as JSON
- POST /api/action/<name> run a named action (toggle_play, rewind, ...)
- POST /api/pace          set the pace directly ({"wpm": 400})
- POST /api/extract       upload a PDF/EPUB and read it instead of the clipboard

The page polls /api/state; playback itself is driven server-side by the
session's timer.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from flask import Flask, current_app, jsonify, render_template_string, request

from clipread.config import DEFAULT_STYLE, FrameStyle, ReaderConfig
from clipread.display import ACTION_NAMES, ACTIONS, build_view
from clipread.engine import ReaderEngine
from clipread.errors import TextSourceError
from clipread.logging_config import setup_logging
from clipread.session import DOCUMENT, ReaderSession
from clipread.sources import allowed_file, extract_text_from_file

logger = logging.getLogger(__name__)

EXTENSION_KEY = "clipread"

HTML_PAGE = r"""
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <title>Clipboard Speed Reader</title>
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <style>
    :root {
      --bg: #0f1115;
      --panel: #181c24;
      --panel2: #202633;
      --text: #e8edf5;
      --muted: #9fb0c8;
      --accent: #66b3ff;
      --danger: #ff5c5c;
      --line: #2e3645;
      --sans-font: Inter, system-ui, -apple-system, "Segoe UI", Roboto, sans-serif;
    }
    * { box-sizing: border-box; }
    body { margin: 0; background: var(--bg); color: var(--text); font-family: var(--sans-font); }
    .topbar {
      display: flex; gap: 10px; align-items: center; flex-wrap: wrap;
      padding: 10px 12px; background: var(--panel); border-bottom: 1px solid var(--line);
    }
    button {
      background: var(--panel2); color: var(--text); border: 1px solid var(--line);
      border-radius: 8px; padding: 7px 10px; cursor: pointer;
    }
    button:hover { border-color: var(--accent); }
    .stage { display: flex; justify-content: center; padding: 32px 12px; }
    .stage img { max-width: 100%; border-radius: 12px; border: 1px solid var(--line); }
    #instructions { white-space: pre-wrap; color: var(--muted); max-width: 600px; }
    .meta { display: flex; gap: 24px; justify-content: center; color: var(--muted); font-size: 14px; }
    .meta b { color: var(--text); font-weight: 600; }
    #notice { min-height: 20px; font-size: 13px; }
    #notice.failure { color: var(--danger); }
    #notice.success { color: var(--accent); }
  </style>
</head>
<body>
  <div class="topbar">
    {% for action in actions %}
    <button data-action="{{ action.name }}" title="{{ action.shortcut }}">{{ action.title }}</button>
    {% endfor %}
    <input id="fileInput" type="file" accept=".pdf,.epub" />
    <button id="uploadBtn">Read document</button>
    <span id="notice"></span>
  </div>
  <div class="stage">
    <img id="frame" alt="word" hidden />
    <div id="instructions"></div>
  </div>
  <div class="meta" id="meta"></div>

<script>
(() => {
  const els = {
    frame: document.getElementById("frame"),
    instructions: document.getElementById("instructions"),
    meta: document.getElementById("meta"),
    notice: document.getElementById("notice"),
    fileInput: document.getElementById("fileInput"),
    uploadBtn: document.getElementById("uploadBtn"),
  };
  let pollMs = 100;
  let poller = null;

  function showNotice(notice) {
    if (!notice) return;
    els.notice.className = notice.style;
    els.notice.textContent = notice.title + (notice.message ? ": " + notice.message : "");
  }

  function render(view) {
    if (view.image) {
      els.frame.src = view.image;
      els.frame.hidden = false;
      els.instructions.textContent = "";
    } else {
      els.frame.hidden = true;
      els.instructions.textContent = view.markdown;
    }
    els.meta.innerHTML = "";
    Object.entries(view.metadata || {}).forEach(([title, text]) => {
      const span = document.createElement("span");
      const b = document.createElement("b");
      b.textContent = text;
      span.append(title + ": ", b);
      els.meta.append(span);
    });
    showNotice(view.notice);
    const next = Math.max(30, Math.min(250, view.interval_ms / 2));
    if (next !== pollMs) { pollMs = next; schedulePoll(); }
  }

  async function refresh() {
    const res = await fetch("/api/state");
    if (res.ok) render(await res.json());
  }

  function schedulePoll() {
    if (poller) clearInterval(poller);
    poller = setInterval(refresh, pollMs);
  }

  async function runAction(name) {
    const res = await fetch("/api/action/" + name, { method: "POST" });
    render(await res.json());
  }

  document.querySelectorAll("button[data-action]").forEach((btn) => {
    btn.addEventListener("click", () => runAction(btn.dataset.action));
  });

  els.uploadBtn.addEventListener("click", async () => {
    const file = els.fileInput.files[0];
    if (!file) return;
    const body = new FormData();
    body.append("file", file);
    const res = await fetch("/api/extract", { method: "POST", body });
    const data = await res.json();
    if (data.view) render(data.view);
    else showNotice({ style: "failure", title: "Error", message: data.error });
  });

  window.addEventListener("keydown", (e) => {
    if (e.target && e.target.tagName === "INPUT") return;
    const mod = e.metaKey || e.ctrlKey;
    let name = null;
    if (e.key === " ") name = "toggle_play";
    else if (e.key === "ArrowLeft" && !mod) name = "rewind";
    else if (e.key === "ArrowRight" && !mod) name = "forward";
    else if (e.key === "ArrowUp" && mod) name = "faster";
    else if (e.key === "ArrowDown" && mod) name = "slower";
    else if (e.key.toLowerCase() === "r" && mod) name = "reload";
    if (name) { e.preventDefault(); runAction(name); }
  });

  refresh();
  schedulePoll();
})();
</script>
</body>
</html>
"""


def get_session() -> ReaderSession:
    return current_app.extensions[EXTENSION_KEY]


def state_payload(session: ReaderSession) -> dict:
    style: FrameStyle = current_app.config["FRAME_STYLE"]
    view = build_view(session.snapshot(), style)
    view["ok"] = True
    view["interval_ms"] = session.engine.interval_ms
    view["notice"] = session.last_notice.to_dict() if session.last_notice else None
    return view


def create_app(
    session: Optional[ReaderSession] = None,
    config: Optional[ReaderConfig] = None,
    style: FrameStyle = DEFAULT_STYLE,
) -> Flask:
    config = config or ReaderConfig()
    if session is None:
        session = ReaderSession(ReaderEngine(config))

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = config.max_upload_mb * 1024 * 1024
    app.config["READER_CONFIG"] = config
    app.config["FRAME_STYLE"] = style
    app.extensions[EXTENSION_KEY] = session

    @app.errorhandler(413)
    def upload_too_large(error):
        return jsonify({"ok": False, "error": f"File too large (limit {config.max_upload_mb} MB)"}), 413

    @app.route("/", methods=["GET"])
    def index():
        return render_template_string(HTML_PAGE, actions=ACTIONS)

    @app.route("/api/state", methods=["GET"])
    def api_state():
        return jsonify(state_payload(get_session()))

    @app.route("/api/action/<name>", methods=["POST"])
    def api_action(name: str):
        if name not in ACTION_NAMES:
            return jsonify({"ok": False, "error": f"Unknown action: {name}"}), 404
        session = get_session()
        getattr(session, name)()
        return jsonify(state_payload(session))

    @app.route("/api/pace", methods=["POST"])
    def api_pace():
        data = request.get_json(silent=True) or {}
        try:
            wpm = int(data["wpm"])
        except (KeyError, TypeError, ValueError, OverflowError):
            return jsonify({"ok": False, "error": "Expected JSON body with integer 'wpm'"}), 400
        session = get_session()
        session.set_pace(wpm)
        return jsonify(state_payload(session))

    @app.route("/api/extract", methods=["POST"])
    def api_extract():
        if "file" not in request.files:
            return jsonify({"ok": False, "error": "No file uploaded"}), 400

        f = request.files["file"]
        if not f or not f.filename:
            return jsonify({"ok": False, "error": "Missing file"}), 400

        filename = f.filename
        if not allowed_file(filename):
            return jsonify({"ok": False, "error": "Unsupported file type (use .pdf or .epub)"}), 400

        suffix = Path(filename).suffix.lower()
        with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as tmp:
            temp_path = tmp.name

        try:
            f.save(temp_path)
            text = extract_text_from_file(temp_path)
        except TextSourceError as e:
            logger.warning("Extraction failed for %s: %s", filename, e)
            return jsonify({"ok": False, "error": str(e)}), 400
        except Exception as e:
            logger.exception("Unexpected extraction failure for %s", filename)
            return jsonify({"ok": False, "error": str(e)}), 500
        finally:
            os.unlink(temp_path)

        session = get_session()
        if not session.load_text(text, DOCUMENT):
            notice = session.last_notice
            return jsonify({"ok": False, "error": notice.message if notice else "No readable text"}), 400

        logger.info("Loaded %s", filename)
        payload = {"ok": True, "filename": filename, "view": state_payload(session)}
        return jsonify(payload)

    return app


def main() -> None:
    setup_logging(level=logging.DEBUG if os.environ.get("CLIPREAD_DEBUG") else logging.INFO)
    config = ReaderConfig.from_env()
    session = ReaderSession(ReaderEngine(config))
    session.start()
    app = create_app(session, config)
    logger.info("Starting clipboard speed reader on http://%s:%d", config.host, config.port)
    try:
        app.run(host=config.host, port=config.port, debug=False)
    finally:
        session.close()


if __name__ == "__main__":
    main()
