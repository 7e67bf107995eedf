"""Fixed-layout PDF renderer for fire alarm inspection & test reports."""

from .errors import LayoutError, RecordError, ReportError, ReportGenerationError
from .logo import ChainedLogo, FilesystemLogo, HttpLogo, LogoImage, LogoProvider, NoLogo, StaticLogo
from .record import EquipmentRow, FireAlarmReport, NotifyEntity, SignOffBlock, load_record
from .render import RenderedReport, generate_report_pdf, render_report, report_filename

__version__ = "0.1.0"
