"""
Widgets that paint static page furniture without touching the network.
"""
import json

from masjid_widgets.core.context import RenderContext
from masjid_widgets.core.page import Page
from masjid_widgets.core.widget_base import SiteWidget

ACCEPT_COOKIE = "kicc-accept-cookie"
MODAL_TOMORROW_COOKIE = "kicc-modal-tmw"
MODAL_REGISTERED_COOKIE = "kicc-modal-registered"


class FooterYearWidget(SiteWidget):
    name = "footer_year"

    def paint(self, page: Page, ctx: RenderContext) -> None:
        page.set_html("footer-year", str(ctx.now.year))


class ChatWidget(SiteWidget):
    """Floating WhatsApp link, and the third-party chat script when one is configured"""
    name = "chat_widget"

    def paint(self, page: Page, ctx: RenderContext) -> None:
        phone_number = self.config.get("phone_number")
        if phone_number and page.select_one(".whatsapp-float") is None and page.soup.body is not None:
            link = page.new_tag(
                "a",
                classes=["whatsapp-float"],
                href=f"https://wa.me/{phone_number}",
                target="_blank",
                rel="noopener",
            )
            link["aria-label"] = "Chat on WhatsApp"
            link.append(page.new_tag("i", classes=["fa-brands", "fa-whatsapp", "whatsapp-icon"]))
            page.soup.body.append(link)

        script_url = self.config.get("script_url")
        if script_url:
            self._inject_script(page, script_url)

    def _inject_script(self, page: Page, script_url: str) -> None:
        if page.select_one(f'script[src="{script_url}"]') is not None:
            return
        options = self.config.get("options") or {}
        script = page.new_tag("script", type="text/javascript", src=script_url)
        script["async"] = ""
        script["onload"] = f"CreateWhatsappChatWidget({json.dumps(options)})"

        first_script = page.soup.find("script")
        if first_script is not None:
            first_script.insert_before(script)
        elif page.soup.head is not None:
            page.soup.head.append(script)
        elif page.soup.body is not None:
            page.soup.body.append(script)
        else:
            self.logger.debug("No place to inject chat script")


class CookiePolicyWidget(SiteWidget):
    name = "cookie_policy"

    def paint(self, page: Page, ctx: RenderContext) -> None:
        if ctx.cookie_flag(ACCEPT_COOKIE):
            page.set_style("cookie-bar", "display: none")
        else:
            page.add_class("cookie-bar", "show")


class SignupModalWidget(SiteWidget):
    """Newsletter modal, suppressed for a day after 'tomorrow' and for good once registered"""
    name = "signup_modal"

    def paint(self, page: Page, ctx: RenderContext) -> None:
        if ctx.cookie_flag(MODAL_TOMORROW_COOKIE) or ctx.cookie_flag(MODAL_REGISTERED_COOKIE):
            return
        modal = page.element("myModal")
        if modal is None:
            return
        page.add_class(modal, "show")
        page.set_style(modal, "display: block")
        modal["data-autohide-ms"] = str(self.config.get("autohide_ms", 30000))


class PrayerCircleWidget(SiteWidget):
    """Initial state of the pillars circle: first dot and its panel active"""
    name = "prayer_circle"

    def paint(self, page: Page, ctx: RenderContext) -> None:
        for dot in page.select(".itemDot"):
            page.remove_class(dot, "active")
        for item in page.select(".CirItem"):
            page.remove_class(item, "active")

        first_dot = page.select_one('.itemDot[data-tab="1"]')
        if first_dot is not None:
            page.add_class(first_dot, "active")
        first_item = page.select_one(".CirItem1")
        if first_item is not None:
            page.add_class(first_item, "active")
