from timetable_app.ui_tk.tabs.dashboard_tab import DashboardTab
from timetable_app.ui_tk.tabs.grid_tabs import ClassViewTab, DayViewTab, GridTab, TeacherViewTab
from timetable_app.ui_tk.tabs.substitution_tab import SubstitutionTab

__all__ = ["DashboardTab", "SubstitutionTab", "GridTab",
           "DayViewTab", "ClassViewTab", "TeacherViewTab"]
