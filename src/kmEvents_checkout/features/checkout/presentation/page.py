"""Browser page that runs the vendor widget for a hosted session."""

import html
import json
from string import Template
from typing import Any

_PAGE = Template("""<!DOCTYPE html>
<html>
    <head>
        <meta charset="utf-8" />
        <title>$title</title>
        <script src="$script_url"></script>
    </head>
    <body>
        <p id="status">Opening payment gateway...</p>
        <script>
            const options = $options;
            const callbackUrl = $callback_url;
            const statusEl = document.getElementById("status");

            function report(event, payload) {
                statusEl.textContent = "Verifying payment...";
                return fetch(callbackUrl + "/" + event, {
                    method: "POST",
                    headers: {"Content-Type": "application/json"},
                    body: JSON.stringify(payload || {})
                }).then((res) => res.json()).then((body) => {
                    const view = body.data ? body.data.view : null;
                    statusEl.textContent = view ? view.title : (body.message || "");
                    window.parent.postMessage({type: "kmEvents.checkout", status: body.data}, "*");
                });
            }

            if (typeof Razorpay === "undefined") {
                statusEl.textContent = "Failed to load payment gateway. Please try again.";
                report("dismissed", {});
            } else {
                options.handler = (response) => report("authorized", response);
                options.modal = Object.assign({}, options.modal, {
                    ondismiss: () => report("dismissed", {})
                });
                const widget = new Razorpay(options);
                widget.on("payment.failed", (response) => report("failed", response));
                widget.open();
            }
        </script>
    </body>
</html>
""")


def _js(value: Any) -> str:
    """JSON that is safe inside a <script> element."""
    return json.dumps(value).replace("</", "<\\/")


def render_checkout_page(
    options: dict[str, Any],
    script_url: str,
    callback_url: str,
    title: str = "Complete your payment",
) -> str:
    return _PAGE.substitute(
        title=html.escape(title),
        script_url=html.escape(script_url, quote=True),
        options=_js(options),
        callback_url=_js(callback_url),
    )
