"""
HTML Template
=============

Status page for the pose coach server.
"""

HTML_TEMPLATE = """
<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Pose Coach</title>
    <style>
      body {
        font-family: 'Segoe UI', system-ui, -apple-system, sans-serif;
        margin: 0;
        min-height: 100vh;
        background: #0f172a;
        color: #e2e8f0;
        display: flex;
        justify-content: center;
        align-items: center;
      }
      .panel {
        background: #1e293b;
        padding: 2rem;
        border-radius: 18px;
        width: min(720px, 100%);
      }
      .buttons {
        display: flex;
        gap: 0.75rem;
        margin-bottom: 1rem;
      }
      button {
        border: none;
        padding: 0.65rem 1.3rem;
        border-radius: 999px;
        font-weight: 600;
        cursor: pointer;
        background: #4c1d95;
        color: #f8fafc;
      }
      button.active {
        background: #ec4899;
      }
      #feedback.good { color: #21aa6f; }
      #feedback.warn { color: #ffb347; }
      #reps { color: #61dafb; font-size: 1.5rem; font-weight: bold; }
      .angles { display: grid; grid-template-columns: repeat(3, 1fr); gap: 0.5rem; color: #94a3b8; }
    </style>
  </head>
  <body>
    <div class="panel">
      <h1>Pose Coach</h1>
      <div class="buttons">
        <button id="pushup" onclick="select('pushup')">Push-up</button>
        <button id="squat" onclick="select('squat')">Squat</button>
        <button id="plank" onclick="select('plank')">Plank</button>
        <button onclick="reset()">Restart</button>
      </div>
      <p id="feedback">Waiting for frames...</p>
      <p id="reps"></p>
      <div id="angles" class="angles"></div>
    </div>
    <script>
      function post(url, body) {
        return fetch(url, {
          method: 'POST',
          headers: {'Content-Type': 'application/json'},
          body: JSON.stringify(body)
        }).then(r => r.json());
      }

      function render(data) {
        ['pushup', 'squat', 'plank'].forEach(name => {
          document.getElementById(name).classList.toggle('active', name === data.exercise);
        });
        const feedback = document.getElementById('feedback');
        feedback.textContent = data.feedback || 'Waiting for frames...';
        feedback.className = data.good_form === null ? '' : (data.good_form ? 'good' : 'warn');
        document.getElementById('reps').textContent =
          data.reps === null ? '' : 'Reps: ' + data.reps + ' (' + data.stage + ')';
        document.getElementById('angles').innerHTML = Object.entries(data.angles)
          .map(([joint, angle]) => '<span>' + joint + ': ' + angle + '&deg;</span>').join('');
      }

      function select(name) { post('/select_exercise', {mode: name}).then(render); }
      function reset() { post('/reset_analyzer', {}).then(refresh); }
      function refresh() { fetch('/status').then(r => r.json()).then(render); }

      refresh();
      setInterval(refresh, 500);
    </script>
  </body>
</html>
"""
