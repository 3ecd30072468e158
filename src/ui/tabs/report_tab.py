import json

import pandas as pd
import streamlit as st

from src.models.reporting import build_design_report
from src.ui.design_state import get_design_snapshot, init_design_state


def render(section):
    st.header("Reporte de Diseño")
    init_design_state(st.session_state)

    # Widget-only keys may be newer than the central state
    for key in ("moment", "bar_diameter", "negative_moment", "draft"):
        if key in st.session_state:
            st.session_state["design_inputs"][key] = st.session_state[key]

    snapshot = get_design_snapshot(st.session_state)
    bundle = build_design_report(section, snapshot)
    res = bundle.result

    st.subheader("Cargas de diseño")
    lc1, lc2, lc3 = st.columns(3)
    lc1.metric("Mu [kN·m]", f"{snapshot.moment:.1f}")
    lc2.metric("Cara", bundle.face_label)
    lc3.metric("Barra Ø [mm]", "-" if snapshot.bar_diameter is None else f"{snapshot.bar_diameter:g}")

    st.divider()
    st.subheader("1. Refuerzo")
    payload = res.result_payload()
    if payload is None:
        st.error(res.status)
    else:
        rows = []
        for name in ("Bottom Reinforcement", "Top Reinforcement"):
            if name not in payload:
                continue
            item = payload[name]
            bars = item.get("bars")
            rows.append(
                {
                    "Ubicacion": name,
                    "Área requerida (mm2)": f"{item['area']:.1f}",
                    "Barras": "-" if bars is None else f"{bars['number']} Ø{bars['diameter']:g}",
                    "Área provista (mm2)": "-" if bars is None else f"{bars['area']:.1f}",
                }
            )
        st.table(pd.DataFrame(rows))

    st.subheader("2. Resumen de flexión")
    st.table(pd.DataFrame([bundle.flexure_summary]))

    st.subheader("3. Verificaciones de diseño")
    st.table(pd.DataFrame(bundle.flexure_checklist))

    st.subheader("4. Advertencias activas")
    if bundle.warnings:
        for warning in bundle.warnings:
            st.warning(warning)
    else:
        st.success("Sin advertencias activas para el diseño actual.")

    st.divider()
    st.subheader("5. Exportar")
    export = bundle.export_payload()
    checklist_csv = pd.DataFrame(bundle.flexure_checklist).to_csv(index=False).encode("utf-8")

    cexp1, cexp2 = st.columns(2)
    cexp1.download_button(
        label="Descargar criterios (CSV)",
        data=checklist_csv,
        file_name="rc_section_checks.csv",
        mime="text/csv",
    )
    cexp2.download_button(
        label="Descargar reporte (JSON)",
        data=json.dumps(export, indent=2, ensure_ascii=False),
        file_name="rc_section_report.json",
        mime="application/json",
    )

    with st.expander("Unidades de entrada"):
        st.json(bundle.units)
