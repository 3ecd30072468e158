import logging
import streamlit as st
from src.models.errors import InvalidInputError
from src.models.section import FlangedSection, RectangularSection, SectionShape
from src.ui.design_state import init_design_state, update_design_inputs
from src.ui.tabs import flexure_tab, report_tab

logging.basicConfig(level=logging.INFO, format="%(name)s - %(levelname)s - %(message)s")

# Page Config
st.set_page_config(page_title="Diseñador de Secciones RC", page_icon="🏗️", layout="wide")
init_design_state(st.session_state)

# Sidebar (Global Inputs)
st.sidebar.title("Sección")
shape = st.sidebar.radio(
    "Forma",
    [SectionShape.RECTANGULAR.value, SectionShape.FLANGED.value],
    format_func=lambda s: "Rectangular" if s == "rectangular" else "Con alas (T)",
)
update_design_inputs(st.session_state, shape=shape)

st.sidebar.subheader("Materiales")
fc = st.sidebar.number_input("f'c [MPa]", 15.0, 100.0, 25.0)
fy = st.sidebar.number_input("fy [MPa]", 200.0, 600.0, 420.0)

st.sidebar.divider()
st.sidebar.subheader("Geometría Seccional")
if shape == SectionShape.FLANGED.value:
    bf = st.sidebar.number_input("Ancho de ala bf [mm]", 100.0, 5000.0, 900.0)
    bw = st.sidebar.number_input("Ancho de alma bw [mm]", 100.0, 2000.0, 300.0)
    tf = st.sidebar.number_input("Espesor de ala tf [mm]", 50.0, 500.0, 120.0)
else:
    b = st.sidebar.number_input("Ancho b [mm]", 100.0, 2000.0, 300.0)
h = st.sidebar.number_input("Altura h [mm]", 150.0, 3000.0, 500.0)
default_cover = st.sidebar.checkbox("Recubrimiento por defecto (10% de h)", False)
cover = None if default_cover else st.sidebar.number_input("Recubrimiento al centroide del acero [mm]", 0.0, 200.0, 40.0)

# Create Section Object
try:
    if shape == SectionShape.FLANGED.value:
        section = FlangedSection(bf, bw, tf, h, fc, fy, cover)
    else:
        section = RectangularSection(b, h, fc, fy, cover)
except InvalidInputError as e:
    st.sidebar.error(str(e))
    st.stop()

# Main App
st.title("🏗️ Diseñador de Secciones RC")

tab_flexure, tab_report = st.tabs(["🔄 Flexión", "📄 Reporte"])

with tab_flexure:
    flexure_tab.render(section)

with tab_report:
    report_tab.render(section)
