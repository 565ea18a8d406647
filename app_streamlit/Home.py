# --------------------------------------------------------------
# File: Home.py
# Description: Página Streamlit para cifrar y descifrar archivos con contraseña.
# --------------------------------------------------------------

import streamlit as st

from api.services import decrypt_upload, encrypt_upload

# Configura los metadatos de la página principal de la aplicación.
st.set_page_config(page_title="DataVault", page_icon="🔐", layout="centered")

st.title("🔐 DataVault")
st.write("Cifrado AES-256-GCM de archivos con contraseña, sin salir de tu equipo.")

# Separa la pantalla en pestañas para cada modo; cada una tiene su propio estado.
tab_enc, tab_dec = st.tabs(["🔒 Cifrar", "🔓 Descifrar"])

with tab_enc:
    f = st.file_uploader("Selecciona un archivo", type=None, key="enc_file")
    password = st.text_input("Contraseña", type="password", key="enc_pass")

    if st.button("Cifrar y descargar", disabled=(not f) or (not password), key="btn_encrypt"):
        with st.spinner("Cifrando archivo..."):
            ok, msg, result = encrypt_upload(f.getvalue(), f.name, f.type or "", password)
        if ok:
            st.success(msg)
            st.download_button(
                "⬇️ Descargar archivo cifrado (.vault)",
                data=result.data,
                file_name=result.file_name,
                mime=result.media_type,
            )
        else:
            st.error(msg)

with tab_dec:
    f_vault = st.file_uploader("Selecciona un archivo .vault", type=["vault"], key="dec_file")
    password_d = st.text_input("Contraseña", type="password", key="dec_pass")

    if st.button(
        "Descifrar y descargar", disabled=(not f_vault) or (not password_d), key="btn_decrypt"
    ):
        with st.spinner("Descifrando archivo..."):
            ok, msg, result = decrypt_upload(f_vault.getvalue(), password_d)
        if ok:
            st.success(msg)
            st.download_button(
                "⬇️ Descargar archivo original",
                data=result.data,
                file_name=result.file_name,
                mime=result.media_type,
            )
        else:
            st.error(msg)

st.caption("Todo el cifrado y descifrado se realiza localmente. Tus archivos no se suben a ningún servidor.")
