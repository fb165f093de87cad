from PyQt5.QtGui import QFont

TEXT_COLOR = (0, 230, 0)
BACKGROUND_COLOR = (0, 0, 0)
PANEL_COLOR = (0, 60, 0)


def get_font(size=12):
    return QFont("FreeSans", size)


def get_stylesheet():
    return """
     * {{
        color: rgb({r_text}, {g_text}, {b_text});
        background-color: rgb({r_bg}, {g_bg}, {b_bg});
        border: 1px solid rgb({r_panel}, {g_panel}, {b_panel});
    }}
    QGraphicsView {{
        border: none;
    }}
    QGroupBox {{
        border: 1px solid rgb({r_text}, {g_text}, {b_text});
        border-radius: 5px;
        font-weight: bold;
        margin-top: 10px;
    }}
    QGroupBox::title {{
        subcontrol-origin: margin;
        subcontrol-position: top right;
        padding: 0 5px;
    }}
    QLabel {{
        border: none;
    }}
    """.format(
        r_text=TEXT_COLOR[0], g_text=TEXT_COLOR[1], b_text=TEXT_COLOR[2],
        r_bg=BACKGROUND_COLOR[0], g_bg=BACKGROUND_COLOR[1], b_bg=BACKGROUND_COLOR[2],
        r_panel=PANEL_COLOR[0], g_panel=PANEL_COLOR[1], b_panel=PANEL_COLOR[2],
    )
