"""
HTML templates for the generated pull request graph page.

Kept as plain format strings so the page can be tweaked without touching
the renderer. Literal braces in JavaScript are doubled for str.format().
"""

MERMAID_SCRIPT_URL = "https://cdn.jsdelivr.net/npm/mermaid/dist/mermaid.min.js"
D3_SCRIPT_URL = "https://cdn.jsdelivr.net/npm/d3@7"

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>{title}</title>
  <!-- Mermaid.js -->
  <script src="{mermaid_url}"></script>
{extra_head}</head>
<body>
  <h1>{title}</h1>
  <div class="mermaid">
{mermaid_code}
  </div>

  <script>
    // Render the Mermaid graph on page load
    mermaid.initialize({{
      startOnLoad: true,
      theme: 'default',
      securityLevel: 'loose'
    }});
{extra_script}  </script>
</body>
</html>
"""

ZOOM_HEAD = """  <!-- D3.js (zoom/pan) -->
  <script src="{d3_url}"></script>
"""

# Wrap each rendered SVG in a <g> and let d3.zoom drive its transform
ZOOM_SCRIPT = """    window.addEventListener('load', function () {
      var svgs = d3.selectAll(".mermaid svg");
      svgs.each(function() {
        var svg = d3.select(this);
        svg.html("<g>" + svg.html() + "</g>");
        var inner = svg.select("g");
        var zoom = d3.zoom().on("zoom", function(event) {
          inner.attr("transform", event.transform);
        });
        svg.call(zoom);
      });
    });
"""
