from __future__ import annotations

# Protocol error messages meaning "this handle or node belongs to another frame".
FOREIGN_OBJECT_ERRORS = (
    'Argument should belong to the same JavaScript world as target object',
    'Could not find object with given id',
    'Cannot find context with specified id',
)
FOREIGN_NODE_ERRORS = (
    'Node with given id does not belong to the document',
    'No node with given id found',
    'Could not find node with given id',
)

TRACE_OVERLAY_ATTRIBUTE = 'data-webhandle-trace'


class Scripts:
    """
    Registry of helper scripts.

    Each helper is a function declaration invoked with ``this`` bound to an
    element (or to the window for page helpers) and a fixed positional
    argument list.
    """

    VISIBLE = """
    function () {
        const el = this.nodeType === Node.ELEMENT_NODE ? this : this.parentElement;
        if (!el) return false;
        const style = window.getComputedStyle(el);
        const rect = el.getBoundingClientRect();
        return style.display !== 'none'
            && style.visibility !== 'hidden'
            && !!(rect.top || rect.bottom || rect.width || rect.height);
    }
    """

    INVISIBLE = """
    function () {
        const el = this.nodeType === Node.ELEMENT_NODE ? this : this.parentElement;
        if (!el) return true;
        const style = window.getComputedStyle(el);
        const rect = el.getBoundingClientRect();
        return !(style.display !== 'none'
            && style.visibility !== 'hidden'
            && !!(rect.top || rect.bottom || rect.width || rect.height));
    }
    """

    TEXT = """
    function () {
        switch (this.tagName) {
            case 'INPUT':
            case 'TEXTAREA':
                return this.value;
            case 'SELECT':
                return Array.from(this.selectedOptions).map(el => el.innerText).join();
            case undefined:
                return this.textContent;
            default:
                return this.innerText;
        }
    }
    """

    SELECT = """
    function (selectors) {
        selectors.forEach(s => {
            Array.from(this.options).find(el => {
                try {
                    if (el.innerText.includes(s) || el.matches(s)) {
                        el.selected = true;
                        return true;
                    }
                } catch (e) {}
                return false;
            });
        });
        this.dispatchEvent(new Event('input', { bubbles: true }));
        this.dispatchEvent(new Event('change', { bubbles: true }));
    }
    """

    SELECT_TEXT = """
    function (pattern) {
        const m = this.value.match(new RegExp(pattern));
        if (m) {
            this.setSelectionRange(m.index, m.index + m[0].length);
        }
    }
    """

    SELECT_ALL_TEXT = """
    function () {
        this.select();
    }
    """

    INPUT_EVENT = """
    function () {
        this.dispatchEvent(new Event('input', { bubbles: true }));
        this.dispatchEvent(new Event('change', { bubbles: true }));
    }
    """

    RESOURCE = """
    function () {
        return this.currentSrc || this.src;
    }
    """

    CONTAINS_ELEMENT = """
    function (el) {
        return document.contains(el);
    }
    """

    QUERY_SELECTOR_ALL = """
    function (selector) {
        return Array.from(document.querySelectorAll(selector));
    }
    """

    SHOW_OVERLAY = """
    function (attribute, id, message) {
        const el = this.nodeType === Node.ELEMENT_NODE ? this : this.parentElement;
        const rect = el ? el.getBoundingClientRect() : { top: 0, left: 0, width: 0, height: 0 };
        const div = document.createElement('div');
        div.setAttribute(attribute, id);
        div.style.cssText = 'position:fixed;z-index:2147483647;pointer-events:none;'
            + 'border:2px solid rgba(255,50,50,0.8);background:rgba(255,50,50,0.15);'
            + `top:${rect.top}px;left:${rect.left}px;`
            + `width:${rect.width}px;height:${rect.height}px;`;
        const label = document.createElement('span');
        label.style.cssText = 'position:absolute;top:-1.4em;left:0;white-space:nowrap;'
            + 'font:12px monospace;color:#fff;background:rgba(0,0,0,0.7);padding:0 4px;';
        label.innerText = message;
        div.appendChild(label);
        document.body.appendChild(div);
    }
    """

    HIDE_OVERLAY = """
    function (attribute, id) {
        document.querySelectorAll(`[${attribute}="${id}"]`).forEach(el => el.remove());
    }
    """

    CANVAS_TO_DATA_URL = '(format, quality) => this.toDataURL(format, quality)'


_HELPERS: dict[str, str] = {
    'visible': Scripts.VISIBLE,
    'invisible': Scripts.INVISIBLE,
    'text': Scripts.TEXT,
    'select': Scripts.SELECT,
    'selectText': Scripts.SELECT_TEXT,
    'selectAllText': Scripts.SELECT_ALL_TEXT,
    'inputEvent': Scripts.INPUT_EVENT,
    'resource': Scripts.RESOURCE,
    'containsElement': Scripts.CONTAINS_ELEMENT,
    'querySelectorAll': Scripts.QUERY_SELECTOR_ALL,
    'showOverlay': Scripts.SHOW_OVERLAY,
    'hideOverlay': Scripts.HIDE_OVERLAY,
}


def js_helper(name: str) -> str:
    """
    Look up a helper script by name.

    Raises:
        KeyError: If no helper is registered under ``name``.
    """
    return _HELPERS[name].strip()
