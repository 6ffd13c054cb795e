INDEX_HTML = r"""<!doctype html>
<html lang="en" data-bs-theme="dark">
<head>
  <meta charset="utf-8">
  <title>{{ app_title }}</title>
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <link href="https://cdn.jsdelivr.net/npm/bootstrap@5.3.3/dist/css/bootstrap.min.css" rel="stylesheet">
  <style>
    .card { border: 1px solid rgba(255,255,255,.08); }
    #log { height: 340px; font-family: Consolas, monospace; font-size: .85rem; background:#15191f; }
    .statusbar { position: fixed; bottom: 0; left: 0; right: 0; padding: .35rem 1rem;
                 background: #1f2630; color: rgba(255,255,255,.8); font-size: .85rem; }
    .path { color: rgba(255,255,255,.6); word-break: break-all; }
  </style>
</head>
<body>
<nav class="navbar navbar-expand-lg bg-body-tertiary px-3">
  <a class="navbar-brand" href="{{ url_for('scummbatch.index') }}">{{ app_title }}</a>
  <div class="ms-auto">
    <a class="btn btn-outline-light btn-sm" href="{{ url_for('scummbatch.about') }}">About</a>
  </div>
</nav>

<div class="container py-4 mb-5">
  {% with messages = get_flashed_messages(with_categories=true) %}
    {% for category, message in messages %}
      <div class="alert alert-{{ category }}" style="white-space: pre-line">{{ message }}</div>
    {% endfor %}
  {% endwith %}

  <div class="card mb-3"><div class="card-body">
    <form method="post" action="{{ url_for('scummbatch.choose_executable') }}" class="row g-2 align-items-center mb-2">
      <label class="col-md-3 col-form-label" for="executable_path">ScummVM executable</label>
      <div class="col-md-7">
        <input class="form-control" id="executable_path" name="executable_path"
               placeholder="C:\ScummVM\scummvm.exe" value="{{ ws.executable_path }}">
      </div>
      <div class="col-md-2"><button class="btn btn-outline-light w-100">Select</button></div>
    </form>
    <form method="post" action="{{ url_for('scummbatch.choose_folder') }}" class="row g-2 align-items-center">
      <label class="col-md-3 col-form-label" for="root_folder">Game root folder</label>
      <div class="col-md-7">
        <input class="form-control" id="root_folder" name="root_folder"
               placeholder="D:\Games\ScummVM" value="{{ ws.root_folder }}">
      </div>
      <div class="col-md-2"><button class="btn btn-outline-light w-100">Select</button></div>
    </form>
  </div></div>

  <form method="post" action="{{ url_for('scummbatch.create') }}" class="mb-3">
    <button id="create" class="btn btn-success" {% if busy %}disabled{% endif %}>Create Batch Files</button>
  </form>

  <textarea id="log" class="form-control" readonly>{{ log_text }}</textarea>
</div>

<div class="statusbar" id="status">{{ ws.status }}</div>

<script>
  const logBox = document.getElementById('log');
  logBox.scrollTop = logBox.scrollHeight;
  document.querySelector('form[action$="/create"]').addEventListener('submit', () => {
    document.getElementById('create').disabled = true;
  });
  setInterval(async () => {
    try {
      const r = await fetch("{{ url_for('scummbatch.log') }}");
      const d = await r.json();
      const text = d.lines.join("\n");
      if (text !== logBox.value) { logBox.value = text; logBox.scrollTop = logBox.scrollHeight; }
      document.getElementById('status').textContent = d.status;
      document.getElementById('create').disabled = d.busy;
    } catch (e) {}
  }, 2000);
</script>
</body>
</html>
"""

ABOUT_HTML = r"""<!doctype html>
<html lang="en" data-bs-theme="dark">
<head>
  <meta charset="utf-8">
  <title>About — {{ app_title }}</title>
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <link href="https://cdn.jsdelivr.net/npm/bootstrap@5.3.3/dist/css/bootstrap.min.css" rel="stylesheet">
</head>
<body>
<nav class="navbar navbar-expand-lg bg-body-tertiary px-3">
  <a class="navbar-brand" href="{{ url_for('scummbatch.index') }}">{{ app_title }}</a>
</nav>
<div class="container py-4">
  <h4>{{ app_name }}</h4>
  <p class="text-secondary">Version {{ version }}</p>
  <p>Creates one batch file per game folder so each ScummVM game can be started
     directly, with auto-detection and fullscreen enabled.</p>
  <a class="btn btn-outline-light btn-sm" href="{{ url_for('scummbatch.index') }}">Back</a>
</div>
</body>
</html>
"""
