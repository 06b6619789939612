"""Static script and style fragments embedded into synthesised documents."""

from __future__ import annotations

import json

DIAGNOSTICS_SOURCE = "preview-console"

BASELINE_CSS = """\
*, *::before, *::after { box-sizing: border-box; margin: 0; padding: 0; }
body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; line-height: 1.5; }"""

# Runs inside the preview frame.  Relays console output and uncaught errors
# to the embedding page as {source, type, message, timestamp} messages.
_DIAGNOSTICS_SHIM_TEMPLATE = """\
(function () {
  var SOURCE = __SOURCE__;
  function format(value) {
    if (value instanceof Error) { return value.stack || value.message; }
    if (value !== null && typeof value === "object") {
      try { return JSON.stringify(value); } catch (e) { return String(value); }
    }
    return String(value);
  }
  function post(type, args) {
    try {
      window.parent.postMessage({
        source: SOURCE,
        type: type,
        message: Array.prototype.map.call(args, format).join(" "),
        timestamp: Date.now()
      }, "*");
    } catch (e) {}
  }
  ["log", "info", "warn", "error", "debug"].forEach(function (level) {
    var original = console[level];
    console[level] = function () {
      if (original) { original.apply(console, arguments); }
      post(level, arguments);
    };
  });
  window.addEventListener("error", function (event) {
    post("error", [event.message + (event.lineno ? " (line " + event.lineno + ")" : "")]);
  });
  window.addEventListener("unhandledrejection", function (event) {
    var reason = event.reason;
    post("error", ["Unhandled Promise: " + (reason && reason.message ? reason.message : reason)]);
  });
})();"""


def diagnostics_shim_script() -> str:
    """Return the shim wrapped in a ``<script>`` tag."""
    body = _DIAGNOSTICS_SHIM_TEMPLATE.replace("__SOURCE__", json.dumps(DIAGNOSTICS_SOURCE))
    return f"<script>\n{body}\n</script>"


REACT_HOOK_BINDINGS = (
    "var { useState, useEffect, useRef, useMemo, useCallback, useReducer, "
    "useContext, createContext, useLayoutEffect, Fragment } = React;"
)

# Hash-fragment router: useRoute() plus Route / Link / Switch, with aliases
# for the common react-router-dom names.  Project code is emitted in a nested
# block, so its own declarations of these names shadow them.
HASH_ROUTER = """\
var __routeListeners = new Set();
function __currentRoute() {
  var hash = window.location.hash.replace(/^#/, "");
  if (!hash) { return "/"; }
  return hash.charAt(0) === "/" ? hash : "/" + hash;
}
window.addEventListener("hashchange", function () {
  var route = __currentRoute();
  __routeListeners.forEach(function (listener) { listener(route); });
});
function __matchRoute(pattern, route) {
  if (pattern === undefined || pattern === null || pattern === "*") { return true; }
  var wanted = String(pattern).split("/").filter(Boolean);
  var actual = route.split("/").filter(Boolean);
  if (wanted.length && wanted[wanted.length - 1] === "*") {
    wanted = wanted.slice(0, -1);
    if (actual.length < wanted.length) { return false; }
    actual = actual.slice(0, wanted.length);
  }
  if (wanted.length !== actual.length) { return false; }
  for (var i = 0; i < wanted.length; i++) {
    if (wanted[i].charAt(0) !== ":" && wanted[i] !== actual[i]) { return false; }
  }
  return true;
}
var useRoute = function () {
  var state = React.useState(__currentRoute());
  React.useEffect(function () {
    var listener = state[1];
    __routeListeners.add(listener);
    return function () { __routeListeners.delete(listener); };
  }, []);
  return state[0];
};
var navigate = function (to) { window.location.hash = to; };
var Route = function (props) {
  var route = useRoute();
  if (!__matchRoute(props.path, route)) { return null; }
  if (props.element !== undefined) { return props.element; }
  if (props.component) { return React.createElement(props.component); }
  return props.children === undefined ? null : props.children;
};
var Link = function (props) {
  var to = props.to || "/";
  var rest = Object.assign({}, props);
  delete rest.to;
  return React.createElement("a", Object.assign(rest, {
    href: "#" + to,
    onClick: function (event) {
      if (props.onClick) { props.onClick(event); }
      if (event.defaultPrevented) { return; }
      event.preventDefault();
      navigate(to);
    }
  }), props.children);
};
var Switch = function (props) {
  var route = useRoute();
  var found = null;
  React.Children.forEach(props.children, function (child) {
    if (found === null && React.isValidElement(child) && __matchRoute(child.props.path, route)) {
      found = child;
    }
  });
  return found;
};
var Routes = Switch;
var NavLink = Link;
var BrowserRouter = function (props) { return props.children === undefined ? null : props.children; };
var HashRouter = BrowserRouter;
var useNavigate = function () { return navigate; };
var useLocation = function () { return { pathname: useRoute() }; };"""

TSX_PRESET_REGISTRATION = """\
Babel.registerPreset("tsx", {
  presets: [[Babel.availablePresets["typescript"], { allExtensions: true, isTSX: true }]]
});"""
