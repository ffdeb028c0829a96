"""Single-page tracker UI served at ``/``."""

PAGE_HTML = """<!doctype html>
<html lang="de">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>NutriTrack KI</title>
    <style>
      :root { --bg: #f8fafc; --card: #ffffff; --text: #0f172a; --muted: #64748b;
              --border: #e2e8f0; --accent: #10b981; }
      .dark { --bg: #020617; --card: #0f172a; --text: #f8fafc; --muted: #94a3b8;
              --border: #1e293b; }
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 0;
             background: var(--bg); color: var(--text); }
      header { display: flex; justify-content: space-between; align-items: center;
               padding: 1rem 2rem; border-bottom: 1px solid var(--border); }
      main { max-width: 960px; margin: 0 auto; padding: 2rem; }
      .card { background: var(--card); border: 1px solid var(--border);
              border-radius: 1rem; padding: 1.25rem; margin-bottom: 1rem; }
      .hidden { display: none; }
      .muted { color: var(--muted); }
      .error { color: #ef4444; }
      textarea { width: 100%; min-height: 5rem; padding: 0.6rem; box-sizing: border-box; }
      button { padding: 0.5rem 1rem; border-radius: 0.6rem; border: 1px solid var(--border);
               cursor: pointer; }
      button.primary { background: var(--accent); color: white; border: none; }
      .totals { display: grid; grid-template-columns: repeat(4, 1fr); gap: 0.5rem; }
      .bar { display: flex; height: 1rem; border-radius: 0.5rem; overflow: hidden; }
      .bar span { display: block; height: 100%; }
      ul { list-style: none; padding: 0; margin: 0; }
      li { display: flex; justify-content: space-between; padding: 0.5rem 0;
           border-bottom: 1px solid var(--border); }
    </style>
  </head>
  <body>
    <header>
      <strong id="brand" style="cursor: pointer">NutriTrack KI</strong>
      <div>
        <span id="count" class="muted"></span>
        <button id="theme" aria-label="Toggle Dark Mode"></button>
      </div>
    </header>
    <main>
      <section id="landing">
        <h1>Essen tracken war noch nie so einfach.</h1>
        <p class="muted">
          Schreib einfach auf, was du gegessen hast, und unsere KI erledigt den Rest.
        </p>
        <button class="primary" id="start">Jetzt starten</button>
      </section>
      <section id="dashboard" class="hidden">
        <form id="meal-form" class="card">
          <label for="meal">Was hast du gegessen?</label>
          <textarea id="meal" placeholder="z.B. 2 gekochte Eier und eine Scheibe Vollkornbrot"></textarea>
          <button class="primary" type="submit" id="submit">Analysieren</button>
          <p id="error" class="error"></p>
        </form>
        <div class="card">
          <h2>Tagesübersicht</h2>
          <div class="totals" id="totals"></div>
          <div class="bar" id="chart"></div>
          <p class="muted" id="legend"></p>
        </div>
        <div class="card">
          <h2>Verlauf</h2>
          <ul id="entries"></ul>
        </div>
      </section>
    </main>
    <script>
      const COLORS = ['#10b981', '#f59e0b', '#3b82f6'];

      async function call(method, path, body) {
        const res = await fetch(path, {
          method,
          headers: { 'Content-Type': 'application/json' },
          body: body ? JSON.stringify(body) : undefined,
        });
        render(await res.json());
      }

      function render(state) {
        document.documentElement.classList.toggle('dark', state.theme === 'dark');
        document.getElementById('theme').textContent = state.theme === 'dark' ? 'Hell' : 'Dunkel';
        document.getElementById('landing').classList.toggle('hidden', state.showDashboard);
        document.getElementById('dashboard').classList.toggle('hidden', !state.showDashboard);
        document.getElementById('count').textContent = state.entryCount + ' Einträge';
        document.getElementById('error').textContent = state.error || '';
        document.getElementById('submit').disabled = state.isLoading;

        const t = state.totals;
        document.getElementById('totals').innerHTML = [
          ['Kalorien', Math.round(t.calories) + ' kcal'],
          ['Eiweiß', t.protein.toFixed(1) + ' g'],
          ['Fett', t.fat.toFixed(1) + ' g'],
          ['Kohlenhydrate', t.carbs.toFixed(1) + ' g'],
        ].map(([k, v]) => '<div><div class="muted">' + k + '</div><b>' + v + '</b></div>').join('');

        const sum = state.chart.reduce((acc, s) => acc + s.value, 0);
        document.getElementById('chart').innerHTML = state.chart.map((s, i) =>
          '<span style="width:' + (100 * s.value / sum) + '%;background:' + COLORS[i % COLORS.length] + '"></span>'
        ).join('');
        document.getElementById('legend').textContent = state.chart.length
          ? state.chart.map(s => s.label + ': ' + s.value.toFixed(1) + ' g').join(' · ')
          : 'Noch keine Daten vorhanden.';

        const list = document.getElementById('entries');
        list.innerHTML = '';
        for (const entry of state.entries) {
          const li = document.createElement('li');
          const text = document.createElement('span');
          text.textContent = entry.itemName + ': ' + Math.round(entry.calories) + ' kcal ('
            + new Date(entry.timestamp).toLocaleTimeString('de-DE') + ')';
          const del = document.createElement('button');
          del.textContent = 'Löschen';
          del.onclick = () => call('DELETE', '/api/entries/' + encodeURIComponent(entry.id));
          li.append(text, del);
          list.append(li);
        }
      }

      document.getElementById('theme').onclick = () => call('POST', '/api/theme/toggle');
      document.getElementById('start').onclick = () => call('POST', '/api/navigation', { showDashboard: true });
      document.getElementById('brand').onclick = () => call('POST', '/api/navigation', { showDashboard: false });
      document.getElementById('meal-form').onsubmit = async (event) => {
        event.preventDefault();
        const input = document.getElementById('meal');
        if (!input.value.trim()) return;
        document.getElementById('submit').disabled = true;
        await call('POST', '/api/entries', { description: input.value });
        if (!document.getElementById('error').textContent) input.value = '';
      };
      call('GET', '/api/dashboard');
    </script>
  </body>
</html>
"""
