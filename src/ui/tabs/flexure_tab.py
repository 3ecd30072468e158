import streamlit as st
import pandas as pd

from src.models import flexure
from src.models.flexure_checklist import build_flexure_checklist, build_flexure_summary
from src.models.section import SectionShape
from src.models.units import mm2_to_cm2
from src.ui import plotting
from src.ui.design_state import get_design_snapshot, init_design_state, update_design_inputs

BAR_DIAMETERS = [None, 10.0, 12.0, 14.0, 16.0, 18.0, 20.0, 22.0, 25.0, 28.0, 32.0]


def _render_status_box(status_code: str, message: str) -> None:
    if status_code == "ok":
        st.success(message)
    elif status_code == "warning":
        st.warning(message)
    else:
        st.error(message)


def _render_reinforcement(title: str, reinforcement) -> None:
    st.write(title)
    st.metric("Área", f"{reinforcement.area:.1f} mm²", help=f"{mm2_to_cm2(reinforcement.area):.2f} cm²")
    if reinforcement.bars is not None:
        bars = reinforcement.bars
        st.caption(f"{bars.number} Ø{bars.diameter:g} = {bars.area:.1f} mm²")


def render(section):
    st.header("Diseño a Flexión de la Sección")
    init_design_state(st.session_state)
    snapshot = get_design_snapshot(st.session_state)

    col1, col2 = st.columns(2)
    with col1:
        moment = st.number_input("Momento aplicado Mu [kN·m]", 0.0, None, snapshot.moment, 10.0, key="moment")
        negative_moment = False
        if section.shape is SectionShape.FLANGED:
            negative_moment = st.checkbox("Momento negativo", snapshot.negative_moment, key="negative_moment")
    with col2:
        index = BAR_DIAMETERS.index(snapshot.bar_diameter) if snapshot.bar_diameter in BAR_DIAMETERS else 0
        bar_diameter = st.selectbox(
            "Diámetro de barra [mm]",
            BAR_DIAMETERS,
            index=index,
            format_func=lambda d: "Solo áreas" if d is None else f"Ø{d:g}",
            key="bar_diameter",
        )
        draft = st.checkbox("Mostrar cantidades intermedias", snapshot.draft, key="draft")

    update_design_inputs(
        st.session_state,
        moment=moment,
        bar_diameter=bar_diameter,
        negative_moment=negative_moment,
        draft=draft,
    )

    res = flexure.calculate_section_design(
        section, moment, bar_diameter=bar_diameter, negative_moment=negative_moment, draft=draft
    )
    face = "Superior (-)" if negative_moment else "Inferior (+)"

    st.subheader("Resultados")
    _render_status_box(res.status_code, res.status)
    if not res.ok:
        return

    c1, c2, c3 = st.columns([1, 1, 1])
    with c1:
        _render_reinforcement("Refuerzo a tracción", res.tension)
    with c2:
        if res.compression is not None:
            _render_reinforcement("Refuerzo a compresión", res.compression)
        else:
            st.info("No requiere acero a compresión.")
    with c3:
        fig = plotting.draw_section_design(section, res, negative_moment)
        st.pyplot(fig)

    st.divider()
    st.subheader("Acero mínimo y criterio gobernante")
    summary = build_flexure_summary(face, res)
    s1, s2, s3 = st.columns(3)
    s1.metric("As mín", f"{summary['As_min_mm2']:.1f} mm²")
    s2.metric("As máx", f"{summary['As_max_mm2']:.1f} mm²")
    s3.metric("Coeficiente de resistencia", f"{summary['resistance_coeff']:.4f}")
    st.caption(f"Controla: {summary['criterio_gobernante']} | {summary['tipo_refuerzo']}")

    st.divider()
    st.subheader("Verificaciones de diseño")
    checklist_df = pd.DataFrame(
        build_flexure_checklist(face, res),
        columns=["Cara", "Check", "Code Ref", "Formula", "Estado", "Valor", "Comentario"],
    )
    st.table(checklist_df)

    if draft:
        st.subheader("Cantidades intermedias")
        st.json(res.to_dict()["draft"])
