"""Course catalog scraper."""

from typing import Optional

from bs4 import BeautifulSoup, Tag
from selenium import webdriver
from selenium.webdriver.common.by import By
from selenium.webdriver.support.ui import WebDriverWait
from selenium.webdriver.support import expected_conditions as EC
from selenium.common.exceptions import TimeoutException
from selenium.webdriver.chrome.options import Options as ChromeOptions

from timetable.models import RECORD_FIELDS, CourseEntry


class CatalogScraper:
    """Scraper for extracting course offerings from a catalog page.

    The catalog is an HTML table whose header row carries the record
    labels (학정번호, 과목명, 강의시간, ...). Column order does not matter.
    Uses Selenium because the table is rendered by JavaScript.
    """

    WAIT_TIMEOUT = 15
    TABLE_SELECTOR = "table"

    def __init__(self, headless: bool = True) -> None:
        """Initialize the scraper.

        Args:
            headless: Run browser in headless mode (default: True).
        """
        self._headless = headless
        self._driver: Optional[webdriver.Chrome] = None
        self._soup: Optional[BeautifulSoup] = None

    def _init_driver(self) -> webdriver.Chrome:
        """Initialize Chrome WebDriver with appropriate options."""
        options = ChromeOptions()
        if self._headless:
            options.add_argument("--headless=new")
        options.add_argument("--no-sandbox")
        options.add_argument("--disable-dev-shm-usage")
        options.add_argument("--disable-gpu")
        options.add_argument("--window-size=1920,1080")
        options.add_argument("--lang=ko-KR")

        return webdriver.Chrome(options=options)

    def fetch_catalog(self, url: str) -> BeautifulSoup:
        """Fetch and parse the catalog page.

        Args:
            url: Full URL to the catalog page.

        Returns:
            Parsed HTML as BeautifulSoup object.
        """
        self._driver = self._init_driver()

        try:
            self._driver.get(url)

            try:
                WebDriverWait(self._driver, self.WAIT_TIMEOUT).until(
                    EC.presence_of_element_located((By.CSS_SELECTOR, self.TABLE_SELECTOR))
                )
            except TimeoutException:
                print("Warning: Catalog table did not appear, parsing page as is.")

            return self.load_html(self._driver.page_source)

        finally:
            if self._driver:
                self._driver.quit()
                self._driver = None

    def load_html(self, html: str) -> BeautifulSoup:
        """Parse catalog HTML that was obtained elsewhere (e.g. a saved page)."""
        self._soup = BeautifulSoup(html, "lxml")
        return self._soup

    def _find_catalog_table(self) -> Optional[Tag]:
        """Return the first table whose header names a course code column."""
        if not self._soup:
            return None

        for table in self._soup.find_all("table"):
            if not isinstance(table, Tag):
                continue
            header = table.find("tr")
            if header and "학정번호" in header.get_text():
                return table

        return None

    def parse_entries(self) -> list[CourseEntry]:
        """Parse the catalog table and extract all course entries.

        Returns:
            List of CourseEntry objects in table order.
        """
        if not self._soup:
            raise RuntimeError("No catalog data loaded. Call fetch_catalog() first.")

        table = self._find_catalog_table()
        if table is None:
            raise ValueError("Catalog table not found in the page")

        rows = [row for row in table.find_all("tr") if isinstance(row, Tag)]
        labels = [
            cell.get_text(strip=True)
            for cell in rows[0].find_all(["th", "td"])
        ]

        entries: list[CourseEntry] = []

        for row in rows[1:]:
            cells = row.find_all(["td", "th"])
            if not cells:
                continue

            record = {
                label: cell.get_text(separator=" ", strip=True)
                for label, cell in zip(labels, cells)
                if label in RECORD_FIELDS
            }

            entry = CourseEntry.from_record(record)
            if not entry.course_code:
                print(f"Warning: Skipping catalog row without course code: {entry.title or '?'}")
                continue

            entries.append(entry)

        return entries
