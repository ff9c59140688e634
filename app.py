import streamlit as st
import pandas as pd
import numpy as np
import plotly.express as px

from components.benchmark import BenchConfig, run_benchmark, summarize
from components.logging_utils import configure_logger
from components.workload import WorkLoad
from forwarding import symbols
from forwarding.forward_table import ForwardTable

configure_logger()

# Configure page
st.set_page_config(
    page_title="ForwardBench",
    page_icon="📞",
    layout="wide",
    initial_sidebar_state="expanded"
)

if 'table' not in st.session_state:
    st.session_state['table'] = ForwardTable()
    st.session_state['rules'] = {}

table = st.session_state['table']
rules = st.session_state['rules']

# Main title
st.title("📞 ForwardBench: Phone Forwarding Tries")
st.markdown("---")

# Sidebar
with st.sidebar:
    st.header("Navigation")
    page = st.selectbox(
        "Choose a section:",
        ["Home", "Benchmark", "Playground"]
    )

    st.markdown("---")
    st.subheader("Quick Actions")
    if st.button("🧹 Clear Table"):
        table.clear()
        rules.clear()
        st.rerun()

# Main content area
if page == "Home":
    st.header("Welcome to ForwardBench")

    st.markdown("""
    A prefix rewrite table for phone numbers, backed by two mirrored tries:

    **Operations:**
    - ➕ `add(from, to)`: every number starting with *from* is reported with *to* instead
    - ➖ `remove(prefix)`: drop every rule whose source starts with *prefix*
    - ➡️ `get(number)`: apply the longest matching rule
    - ⬅️ `reverse(number)`: numbers that the current rules map onto *number*
    """)

    forward_nodes, reverse_nodes = table.count_nodes()
    col1, col2, col3 = st.columns(3)

    with col1:
        st.metric("Rules", len(rules))

    with col2:
        st.metric("Forward Trie Nodes", forward_nodes)

    with col3:
        st.metric("Reverse Trie Nodes", reverse_nodes)

elif page == "Benchmark":
    st.header("⏱️ Benchmark")

    col1, col2 = st.columns(2)

    with col1:
        sizes = st.multiselect(
            "Rule counts",
            [500, 1_000, 5_000, 10_000, 20_000, 50_000],
            default=[1_000, 5_000, 20_000]
        )
        queries = st.slider("Queries per run", min_value=100, max_value=20_000, value=2_000, step=100)

    with col2:
        seed = st.number_input("Seed", min_value=0, value=42, step=1)
        special_share = st.slider("Share of '*' / '#' symbols", 0.0, 0.5, 0.0, 0.05)
        shared_target_share = st.slider("Share of rules reusing a target", 0.0, 1.0, 0.2, 0.05)

    if st.button("▶️ Run Benchmark"):
        if not sizes:
            st.warning("⚠️ Pick at least one rule count")
        else:
            try:
                config = BenchConfig(
                    sizes=tuple(sorted(sizes)),
                    queries=queries,
                    seed=int(seed),
                    special_share=special_share,
                    shared_target_share=shared_target_share,
                )
                with st.spinner("Running..."):
                    st.session_state['bench'] = run_benchmark(config)
            except ValueError as e:
                st.error(f"❌ Invalid benchmark settings: {str(e)}")

    if 'bench' in st.session_state:
        df = st.session_state['bench']

        st.subheader("Results")
        st.dataframe(df, use_container_width=True)

        st.subheader("Mean Latency by Size")
        fig = px.line(df, x="size", y="mean_us", color="operation", markers=True,
                      title="Mean latency (µs) per operation")
        st.plotly_chart(fig, use_container_width=True)

        fig_p95 = px.bar(df, x="operation", y="p95_us", color=df["size"].astype(str),
                         barmode="group", title="p95 latency (µs)")
        st.plotly_chart(fig_p95, use_container_width=True)

        st.subheader("Summary")
        st.dataframe(summarize(df))

        nodes = df.drop_duplicates("size")[["size", "forward_nodes", "reverse_nodes"]]
        nodes_long = nodes.melt(id_vars="size", var_name="trie", value_name="nodes")
        fig_nodes = px.bar(nodes_long, x="size", y="nodes", color="trie", barmode="group",
                           title="Trie size after inserting all rules")
        st.plotly_chart(fig_nodes, use_container_width=True)
    else:
        st.info("👆 Configure and run a benchmark to see results")

elif page == "Playground":
    st.header("🧪 Playground")

    tab1, tab2, tab3 = st.tabs(["Rules", "Lookup", "Random Fill"])

    with tab1:
        with st.form("add_rule"):
            c1, c2 = st.columns(2)
            num_from = c1.text_input("From prefix")
            num_to = c2.text_input("To prefix")
            if st.form_submit_button("➕ Add"):
                if table.add(num_from, num_to):
                    rules[num_from] = num_to
                    st.success(f"✅ {num_from} → {num_to}")
                else:
                    st.error("❌ Rule rejected (invalid or identical numbers)")

        with st.form("remove_rule"):
            prefix = st.text_input("Prefix to remove")
            if st.form_submit_button("➖ Remove"):
                if symbols.is_number(prefix):
                    table.remove(prefix)
                    for src in [s for s in rules if s.startswith(prefix)]:
                        del rules[src]
                    st.success(f"✅ Removed rules under {prefix}")
                else:
                    st.warning("⚠️ Not a phone number; nothing removed")

        if rules:
            st.dataframe(pd.DataFrame(sorted(rules.items()), columns=["from", "to"]))

    with tab2:
        number = st.text_input("Number")
        if number:
            forwarded = table.get(number)
            reversed_ = table.reverse(number)
            c1, c2 = st.columns(2)
            with c1:
                st.write("**get:**")
                st.write(forwarded.to_list() if forwarded is not None else "allocation failure")
            with c2:
                st.write("**reverse:**")
                st.write(reversed_.to_list() if reversed_ is not None else "allocation failure")

    with tab3:
        n_rules = st.slider("Rules to add", 10, 1_000, 100, 10)
        fill_seed = st.number_input("Fill seed", min_value=0, value=7, step=1)
        if st.button("🎲 Fill"):
            generated = WorkLoad(int(fill_seed)).rules(n_rules, prefix_max=4)
            added = np.array([table.add(src, dst) for src, dst in generated])
            for (src, dst), ok in zip(generated, added):
                if ok:
                    rules[src] = dst
            st.success(f"✅ Added {int(added.sum())} rules")

# Footer
st.markdown("---")
st.markdown(
    """
    <div style='text-align: center; color: #B0B0B0; padding: 1rem;'>
        Built with Streamlit 🚀 | ForwardBench
    </div>
    """,
    unsafe_allow_html=True
)
